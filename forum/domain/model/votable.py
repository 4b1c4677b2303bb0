"""Votable capability shared by posts and comments.

A votable aggregate caches its up/down vote counts so that read paths
never have to count vote records. The counters are only ever changed
through ``apply_vote_delta``; every persisted change bumps ``version``,
which the repositories use for optimistic concurrency control.
"""

from abc import ABC, abstractmethod
from typing import ClassVar
from uuid import UUID

from pydantic import Field

from forum.domain.error import InvalidVoteValueError
from forum.domain.model.common import DomainModel
from forum.domain.value import PostId, VotableType

_ALLOWED_VOTE_VALUES = (-1, 0, 1)


def vote_delta(old_value: int, new_value: int) -> tuple[int, int]:
    """Translate a vote transition into counter deltas.

    Args:
        old_value: Previous vote (-1 down, 0 none, 1 up)
        new_value: New vote (-1 down, 0 none, 1 up)

    Returns:
        (delta_up, delta_down), each in {-1, 0, 1}

    Raises:
        InvalidVoteValueError: If either value is outside {-1, 0, 1}
    """
    for value in (old_value, new_value):
        if value not in _ALLOWED_VOTE_VALUES:
            raise InvalidVoteValueError(value)

    if old_value == new_value:
        return 0, 0

    delta_up = int(new_value == 1) - int(old_value == 1)
    delta_down = int(new_value == -1) - int(old_value == -1)
    return delta_up, delta_down


class Votable(DomainModel, ABC):
    """Base for aggregates that carry vote counters."""

    votable_type: ClassVar[VotableType]

    id: UUID
    up_count: int = Field(default=0, ge=0)
    down_count: int = Field(default=0, ge=0)
    version: int = Field(default=0, ge=0)

    @property
    def score(self) -> int:
        """Net score (up minus down)."""
        return self.up_count - self.down_count

    @property
    @abstractmethod
    def post_ref(self) -> PostId:
        """Post this target belongs to (used for community checks)."""

    @abstractmethod
    def ensure_votable(self) -> None:
        """Raise a business rule violation if votes are not accepted."""

    def apply_vote_delta(self, old_value: int, new_value: int) -> "Votable":
        """Apply a vote transition to the counters.

        Counters are clamped at zero: a decrement that would go negative
        means the stored counter had already drifted, and is dropped
        instead of raising.

        Args:
            old_value: Previous vote (-1, 0, 1)
            new_value: New vote (-1, 0, 1)

        Returns:
            Copy of the aggregate with updated counters
        """
        delta_up, delta_down = vote_delta(old_value, new_value)
        return self.model_copy(
            update={
                "up_count": max(self.up_count + delta_up, 0),
                "down_count": max(self.down_count + delta_down, 0),
            }
        )
