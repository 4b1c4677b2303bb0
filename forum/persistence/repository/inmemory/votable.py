"""Optimistic save shared by the in-memory votable repositories."""

from typing import Any, MutableMapping, TypeVar

from forum.domain.error import ConcurrencyConflictError
from forum.domain.model.votable import Votable

T = TypeVar("T", bound=Votable)


def save_versioned(table: MutableMapping[Any, T], entity: T, resource: str) -> T:
    """Insert a new aggregate or update one whose version still matches.

    Raises:
        ConcurrencyConflictError: If the stored version differs
    """
    stored = table.get(entity.id)
    if stored is None:
        table[entity.id] = entity
        return entity

    if stored.version != entity.version:
        raise ConcurrencyConflictError(
            resource, str(entity.id), expected_version=entity.version
        )

    saved = entity.model_copy(update={"version": entity.version + 1})
    table[entity.id] = saved
    return saved
