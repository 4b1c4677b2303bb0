"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum, IntEnum

from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator

from forum.domain.error import InvalidCommentBodyError
from forum.domain.value.common import RootValueObject

# Upper bound for any stored comment body (edits included).
MAX_COMMENT_BODY_LENGTH = 20000

# Upper bound accepted when a comment is first created.
MAX_NEW_COMMENT_LENGTH = 10000


class VoteValue(IntEnum):
    """Value of a stored vote.

    Absence of a vote is represented by the absence of a record,
    never by a zero value.
    """

    UP = 1
    DOWN = -1


class VoteAction(str, Enum):
    """What a voter asks for."""

    UP = "up"
    DOWN = "down"
    CANCEL = "cancel"


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class PostStatus(str, Enum):
    """Lifecycle status of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class CommentStatus(str, Enum):
    """Lifecycle status of a comment.

    DELETED is terminal: a deleted comment keeps its place in the tree
    but can no longer be edited, deleted again, or voted on.
    """

    VISIBLE = "visible"
    DELETED = "deleted"

    def can_transition_to(self, target: "CommentStatus") -> bool:
        """Check the transition table."""
        return target in _COMMENT_TRANSITIONS[self]

    @property
    def is_mutable(self) -> bool:
        """Whether body edits and votes are accepted in this status."""
        return self is CommentStatus.VISIBLE


_COMMENT_TRANSITIONS: dict[CommentStatus, frozenset[CommentStatus]] = {
    CommentStatus.VISIBLE: frozenset({CommentStatus.DELETED}),
    CommentStatus.DELETED: frozenset(),
}


class CommentSort(str, Enum):
    """Ordering of a comment listing."""

    NEW = "new"  # created_at ASC


class CommentBody(RootValueObject[str]):
    """Text of a comment.

    Must not be blank and must not exceed MAX_COMMENT_BODY_LENGTH characters.
    """

    @field_validator("root")
    @classmethod
    def validate_body(cls, v: str) -> str:
        """Validate body is not blank and within length limits."""
        if not v.strip():
            raise ValueError("Comment body must not be blank")
        if len(v) > MAX_COMMENT_BODY_LENGTH:
            raise ValueError(
                f"Comment body must be at most {MAX_COMMENT_BODY_LENGTH} characters"
            )
        return v

    @classmethod
    def parse(cls, text: str) -> "CommentBody":
        """Build a body, raising a domain error on invalid input."""
        try:
            return cls(text)
        except PydanticValidationError as e:
            raise InvalidCommentBodyError(e.errors()[0]["msg"]) from e


class DisplayName(RootValueObject[str]):
    """Member display name shown next to their content."""

    @field_validator("root")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        """Validate display name is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Display name must be 1-255 characters")
        return v
