"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from forum.domain.service import CommentService
from forum.domain.value import MAX_COMMENT_BODY_LENGTH, CommentId, UserId

from .create_comment import CommentResponse


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)
    body: str = Field(min_length=1, max_length=MAX_COMMENT_BODY_LENGTH)


class UpdateCommentUseCase:
    """Use case for updating a comment's text content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentResponse:
        """Execute update comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If user doesn't own the comment
            ContentDeletedException: If comment is deleted
        """
        comment = await self.comment_service.edit_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            editor_id=UserId(UUID(request.user_id)),
            body=request.body,
        )
        return CommentResponse.from_comment(comment)
