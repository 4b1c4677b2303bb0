"""Domain layer errors.

Every error carries a ``details`` dict with the offending identifiers so
callers can render their own messages.
"""

from typing import Any


class DomainError(Exception):
    """Base domain error."""

    kind = "domain"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.details = details


class ValidationError(DomainError):
    """Domain validation error."""

    kind = "validation"


class InvalidCommentBodyError(ValidationError):
    """Raised when comment text is blank or too long."""

    def __init__(self, reason: str):
        super().__init__(f"Invalid comment body: {reason}", reason=reason)


class InvalidCommentDepthError(ValidationError):
    """Raised when a comment would be created below its minimum depth."""

    def __init__(self, depth: int, minimum: int = 0):
        super().__init__(
            f"Comment depth must be >= {minimum}, got {depth}",
            depth=depth,
            minimum=minimum,
        )


class InvalidVoteValueError(ValidationError):
    """Raised when a vote value falls outside the allowed range."""

    def __init__(self, value: object, allowed: str = "-1, 0 or 1"):
        super().__init__(
            f"Vote value must be {allowed}, got {value!r}", value=value
        )


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    kind = "state_conflict"


class ContentDeletedException(BusinessRuleViolationError):
    """Raised when attempting to modify deleted content."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            f"Cannot modify deleted {resource} {resource_id}",
            resource=resource,
            resource_id=resource_id,
        )


class NotVotableError(BusinessRuleViolationError):
    """Raised when the target's lifecycle state does not accept votes."""

    def __init__(self, resource: str, resource_id: str, status: str):
        super().__init__(
            f"Cannot vote on {resource} {resource_id} in status {status}",
            resource=resource,
            resource_id=resource_id,
            status=status,
        )


class NotCommentableError(BusinessRuleViolationError):
    """Raised when a post does not accept new comments."""

    def __init__(self, post_id: str, status: str):
        super().__init__(
            f"Cannot comment on post {post_id} in status {status}",
            post_id=post_id,
            status=status,
        )


class NotAuthorizedError(DomainError):
    """Raised when a user is not permitted to perform an action."""

    kind = "not_authorized"

    def __init__(self, resource: str, resource_id: str, user_id: str, action: str):
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}",
            resource=resource,
            resource_id=resource_id,
            user_id=user_id,
            action=action,
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            f"{resource} not found: {identifier}",
            resource=resource,
            identifier=identifier,
        )


class ConcurrencyConflictError(DomainError):
    """Raised when an optimistic version check fails.

    Retried by the services; escalated once the attempts are exhausted.
    """

    kind = "concurrency_conflict"

    def __init__(self, resource: str, identifier: str, expected_version: int | None = None):
        super().__init__(
            f"Concurrent modification of {resource} {identifier}",
            resource=resource,
            identifier=identifier,
            expected_version=expected_version,
        )
