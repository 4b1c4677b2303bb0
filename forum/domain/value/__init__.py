"""Domain value objects for the forum."""

from forum.domain.value.identifiers import (
    CommentId,
    CommunityId,
    PostId,
    UserId,
    VoteId,
)
from forum.domain.value.types import (
    MAX_COMMENT_BODY_LENGTH,
    MAX_NEW_COMMENT_LENGTH,
    CommentBody,
    CommentSort,
    CommentStatus,
    DisplayName,
    PostStatus,
    VotableType,
    VoteAction,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "CommunityId",
    "PostId",
    "CommentId",
    "VoteId",
    # Types
    "CommentBody",
    "CommentSort",
    "CommentStatus",
    "DisplayName",
    "PostStatus",
    "VotableType",
    "VoteAction",
    "VoteValue",
    # Limits
    "MAX_COMMENT_BODY_LENGTH",
    "MAX_NEW_COMMENT_LENGTH",
]
