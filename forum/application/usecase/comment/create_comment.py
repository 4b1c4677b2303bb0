"""Create comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from forum.domain.model import Comment
from forum.domain.service import CommentService
from forum.domain.value import MAX_NEW_COMMENT_LENGTH, CommentId, PostId, UserId


class CommentResponse(BaseModel):
    """A single comment as returned by write operations."""

    comment_id: str
    post_id: str
    parent_comment_id: str | None
    author_id: str
    body: str | None  # None when deleted
    depth: int
    deleted: bool
    edited: bool
    up_count: int
    down_count: int
    score: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            parent_comment_id=str(comment.parent_id) if comment.parent_id else None,
            author_id=str(comment.author_id),
            body=None if comment.is_deleted else comment.body.root,
            depth=comment.depth,
            deleted=comment.is_deleted,
            edited=comment.edited,
            up_count=comment.up_count,
            down_count=comment.down_count,
            score=comment.score,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    user_id: str  # Author ID from authenticated user
    body: str = Field(min_length=1, max_length=MAX_NEW_COMMENT_LENGTH)
    parent_comment_id: str | None = None  # UUID string for replies


class CreateCommentUseCase:
    """Use case for commenting on a post or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            NotFoundError: If the post or parent does not exist
            NotCommentableError: If the post does not accept comments
            NotAuthorizedError: If the author is banned
        """
        parent_id = (
            CommentId(UUID(request.parent_comment_id))
            if request.parent_comment_id
            else None
        )
        comment = await self.comment_service.create_comment(
            post_id=PostId(UUID(request.post_id)),
            author_id=UserId(UUID(request.user_id)),
            body=request.body,
            parent_id=parent_id,
        )
        return CommentResponse.from_comment(comment)
