"""Shared repository contract for votable aggregates."""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from uuid import UUID

from forum.domain.model.votable import Votable

T = TypeVar("T", bound=Votable)


class VotableRepository(ABC, Generic[T]):
    """Repository for an aggregate that carries vote counters.

    Saves are optimistic: an aggregate loaded at version N can only be
    written back while the stored row is still at version N.
    """

    @abstractmethod
    async def find_by_id(self, entity_id: UUID) -> Optional[T]:
        """Find an aggregate by ID.

        Args:
            entity_id: The aggregate's unique identifier

        Returns:
            The aggregate if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, entity: T) -> T:
        """Save an aggregate (create or update).

        New aggregates are inserted. Existing ones are updated only if the
        stored version still equals ``entity.version``; the stored version
        is then incremented.

        Args:
            entity: The aggregate to save

        Returns:
            The saved aggregate, carrying its new version

        Raises:
            ConcurrencyConflictError: If the stored version has moved on
        """
        pass
