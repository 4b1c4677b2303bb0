"""Post aggregate root.

Only the parts of a post that voting and commenting depend on live here:
its lifecycle status, vote counters and comment count.
"""

from datetime import datetime
from typing import ClassVar

from pydantic import Field

from forum.domain.error import NotCommentableError, NotVotableError
from forum.domain.model.votable import Votable
from forum.domain.value import CommunityId, PostId, PostStatus, UserId, VotableType


class Post(Votable):
    """Post aggregate root.

    Business rules:
    - Only PUBLISHED posts accept votes and new comments
    - comment_count tracks visible comments and never goes below zero
    """

    votable_type: ClassVar[VotableType] = VotableType.POST

    id: PostId
    community_id: CommunityId
    author_id: UserId
    title: str = Field(min_length=1, max_length=300)
    status: PostStatus = PostStatus.PUBLISHED
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def post_ref(self) -> PostId:
        return self.id

    def ensure_votable(self) -> None:
        if self.status != PostStatus.PUBLISHED:
            raise NotVotableError("post", str(self.id), self.status.value)

    def ensure_commentable(self) -> None:
        if self.status != PostStatus.PUBLISHED:
            raise NotCommentableError(str(self.id), self.status.value)

    def increment_comment_count(self) -> "Post":
        """Record a new visible comment."""
        return self.model_copy(update={"comment_count": self.comment_count + 1})

    def decrement_comment_count(self) -> "Post":
        """Record a comment leaving the visible set (minimum 0)."""
        return self.model_copy(
            update={"comment_count": max(self.comment_count - 1, 0)}
        )
