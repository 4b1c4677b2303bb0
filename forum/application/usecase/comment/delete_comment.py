"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import CommentService
from forum.domain.value import CommentId, UserId

from .create_comment import CommentResponse


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str  # Author or community moderator


class DeleteCommentUseCase:
    """Use case for soft-deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> CommentResponse:
        """Execute delete comment flow.

        Returns:
            The deleted comment (body withheld)
        """
        comment = await self.comment_service.delete_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            actor_id=UserId(UUID(request.user_id)),
        )
        return CommentResponse.from_comment(comment)
