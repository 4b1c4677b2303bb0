"""Comment entity.

Comments form reply trees under a post. A comment's depth is fixed when
it is created (root = 0, reply = parent depth + 1) and is never
recomputed. Deletion is soft and terminal: the record stays in the tree
so its replies remain reachable.
"""

from datetime import datetime
from typing import ClassVar, Optional
from uuid import uuid4

from pydantic import Field, model_validator

from forum.domain.error import (
    ContentDeletedException,
    InvalidCommentDepthError,
    NotVotableError,
)
from forum.domain.model.votable import Votable
from forum.domain.value import (
    CommentBody,
    CommentId,
    CommentStatus,
    PostId,
    UserId,
    VotableType,
)


class Comment(Votable):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for roots)
    - depth: Nesting level (0 for roots, parent depth + 1 for replies)
    """

    votable_type: ClassVar[VotableType] = VotableType.COMMENT

    id: CommentId
    post_id: PostId
    author_id: UserId
    body: CommentBody
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    status: CommentStatus = CommentStatus.VISIBLE
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_threading(self) -> "Comment":
        """Validate that only roots have depth 0."""
        if (self.depth == 0) != (self.parent_id is None):
            raise ValueError("depth must be 0 exactly when parent_id is None")
        return self

    @classmethod
    def create_root(cls, post_id: PostId, author_id: UserId, body: str) -> "Comment":
        """Create a top-level comment on a post.

        Raises:
            InvalidCommentBodyError: If body is blank or too long
        """
        return cls._new(post_id, author_id, None, 0, CommentBody.parse(body))

    @classmethod
    def reply_to(
        cls,
        post_id: PostId,
        author_id: UserId,
        parent_id: CommentId,
        parent_depth: int,
        body: str,
    ) -> "Comment":
        """Create a reply one level below its parent.

        Args:
            post_id: Post the thread belongs to
            author_id: Author of the reply
            parent_id: Comment being replied to
            parent_depth: Stored depth of the parent comment
            body: Reply text

        Raises:
            InvalidCommentDepthError: If parent_depth is negative
            InvalidCommentBodyError: If body is blank or too long
        """
        if parent_depth < 0:
            raise InvalidCommentDepthError(parent_depth + 1, minimum=1)
        return cls._new(
            post_id, author_id, parent_id, parent_depth + 1, CommentBody.parse(body)
        )

    @classmethod
    def _new(
        cls,
        post_id: PostId,
        author_id: UserId,
        parent_id: Optional[CommentId],
        depth: int,
        body: CommentBody,
    ) -> "Comment":
        if depth < 0:
            raise InvalidCommentDepthError(depth)
        now = datetime.now()
        return cls(
            id=CommentId(uuid4()),
            post_id=post_id,
            author_id=author_id,
            body=body,
            parent_id=parent_id,
            depth=depth,
            status=CommentStatus.VISIBLE,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_deleted(self) -> bool:
        return self.status == CommentStatus.DELETED

    @property
    def edited(self) -> bool:
        """Whether the body changed after creation."""
        return self.updated_at != self.created_at

    @property
    def post_ref(self) -> PostId:
        return self.post_id

    def edit(self, new_body: str) -> "Comment":
        """Replace the body.

        Raises:
            ContentDeletedException: If the comment is deleted
            InvalidCommentBodyError: If new_body is blank or too long
        """
        if not self.status.is_mutable:
            raise ContentDeletedException("comment", str(self.id))
        return self.model_copy(
            update={"body": CommentBody.parse(new_body), "updated_at": datetime.now()}
        )

    def soft_delete(self) -> "Comment":
        """Mark the comment as deleted.

        Raises:
            ContentDeletedException: If the comment is already deleted
        """
        self._ensure_transition(CommentStatus.DELETED)
        return self.model_copy(
            update={"status": CommentStatus.DELETED, "deleted_at": datetime.now()}
        )

    def ensure_votable(self) -> None:
        if not self.status.is_mutable:
            raise NotVotableError("comment", str(self.id), self.status.value)

    def _ensure_transition(self, target: CommentStatus) -> None:
        if not self.status.can_transition_to(target):
            raise ContentDeletedException("comment", str(self.id))
