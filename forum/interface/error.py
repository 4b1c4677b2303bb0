"""Translation of domain errors into HTTP responses."""

import logfire
from fastapi import HTTPException, status

from forum.domain.error import (
    BusinessRuleViolationError,
    ConcurrencyConflictError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)

# First match wins; subclasses must precede their bases
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessRuleViolationError, status.HTTP_409_CONFLICT),
    (ConcurrencyConflictError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
]


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP exception a route should raise.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException carrying the error message and its kind
    """
    status_code = next(
        (code for kind, code in _STATUS_BY_ERROR if isinstance(error, kind)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code >= 500:
        logfire.error(
            "Request failed with domain error",
            kind=error.kind,
            error=str(error),
            status_code=status_code,
        )
    else:
        logfire.warn(
            "Request rejected",
            kind=error.kind,
            error=str(error),
            status_code=status_code,
        )
    return HTTPException(
        status_code=status_code,
        detail={"kind": error.kind, "message": str(error)},
    )


def unauthenticated(action: str) -> HTTPException:
    """Error for routes that need a signed-in member."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"Authentication required to {action}",
    )


def bad_request(error: ValueError) -> HTTPException:
    """Error for malformed identifiers or request fields."""
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
