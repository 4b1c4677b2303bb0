"""Base service class for domain services."""

from typing import Awaitable, Callable, TypeVar

import logfire
from sqlalchemy.exc import IntegrityError

from forum.domain.error import ConcurrencyConflictError, NotFoundError
from forum.domain.model.member import Member
from forum.domain.repository import MemberDirectory, TransactionManager
from forum.domain.value import UserId

R = TypeVar("R")

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"
UNIQUE_VOTE_CONSTRAINT = "unique_vote"


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


def is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an integrity error is a lost insert race.

    Foreign key, check and not-null violations are not races and
    return False.
    """
    orig = error.orig
    for source in (orig, getattr(orig, "__cause__", None)):
        if source is None:
            continue
        if UNIQUE_VIOLATION in (
            getattr(source, "sqlstate", None),
            getattr(source, "pgcode", None),
        ):
            return True
        if getattr(source, "constraint_name", None) == UNIQUE_VOTE_CONSTRAINT:
            return True
    return UNIQUE_VOTE_CONSTRAINT in str(orig)


async def require_member(directory: MemberDirectory, member_id: UserId) -> Member:
    """Resolve the acting member before anything is written for them.

    Raises:
        NotFoundError: If the member does not exist
    """
    found = await directory.find_by_ids([member_id])
    if not found:
        logfire.warn("Unknown member", member_id=str(member_id))
        raise NotFoundError("member", str(member_id))
    return found[0]


async def run_atomic(
    transactions: TransactionManager,
    operation: Callable[[], Awaitable[R]],
    *,
    max_attempts: int,
    resource: str,
    identifier: str,
) -> R:
    """Run an operation in its own unit of work, retrying on write races.

    Each attempt re-runs ``operation`` from scratch so it re-reads fresh
    state. Only optimistic version conflicts and unique-constraint
    violations are retried; every other error, including other integrity
    errors, propagates on the first attempt.

    Args:
        transactions: Transaction manager opening the unit of work
        operation: Coroutine factory performing reads and writes
        max_attempts: Attempts before giving up
        resource: Resource name for the escalated error
        identifier: Resource identifier for the escalated error

    Returns:
        Whatever ``operation`` returns

    Raises:
        ConcurrencyConflictError: If every attempt lost a race
        IntegrityError: If a write broke a constraint other than uniqueness
    """
    last_error: Exception | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            async with transactions.atomic():
                return await operation()
        except (ConcurrencyConflictError, IntegrityError) as e:
            if isinstance(e, IntegrityError) and not is_unique_violation(e):
                logfire.error(
                    "Constraint violation",
                    resource=resource,
                    identifier=identifier,
                    error=str(e.orig),
                )
                raise
            last_error = e
            logfire.warn(
                "Write race lost, retrying",
                resource=resource,
                identifier=identifier,
                attempt=attempt,
                max_attempts=max_attempts,
                error=str(e),
            )

    logfire.error(
        "Write retries exhausted",
        resource=resource,
        identifier=identifier,
        max_attempts=max_attempts,
    )
    raise ConcurrencyConflictError(resource, identifier) from last_error
