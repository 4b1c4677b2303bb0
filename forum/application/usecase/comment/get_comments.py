"""Get comments use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import CommentNode, CommentTreeService, JWTService
from forum.domain.value import CommentId, CommentSort, PostId


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string
    parent_comment_id: str | None = None  # List replies of this comment instead
    auth_token: str | None = None  # JWT token for authentication (optional)
    sort: CommentSort = CommentSort.NEW
    page: int = 0
    size: int | None = None


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    parent_comment_id: str | None
    items: list[CommentNode]
    page: int
    size: int
    total: int
    total_pages: int
    has_next: bool


class GetCommentsUseCase:
    """Use case for reading a page of a post's comment tree."""

    def __init__(
        self,
        comment_tree_service: CommentTreeService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_tree_service: Comment tree builder
            jwt_service: JWT service for decoding auth tokens
        """
        self.comment_tree_service = comment_tree_service
        self.jwt_service = jwt_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Anonymous viewers get the same tree without ``mine``/``my_vote``.

        Args:
            request: Get comments request with post ID and optional auth token

        Returns:
            One page of comments with their first level of replies
        """
        viewer_id = self.jwt_service.get_user_id_from_token(request.auth_token)
        parent_id = (
            CommentId(UUID(request.parent_comment_id))
            if request.parent_comment_id
            else None
        )

        page = await self.comment_tree_service.build(
            post_id=PostId(UUID(request.post_id)),
            parent_comment_id=parent_id,
            viewer_id=viewer_id,
            sort=request.sort,
            page=request.page,
            size=request.size,
        )

        return GetCommentsResponse(
            post_id=request.post_id,
            parent_comment_id=request.parent_comment_id,
            items=page.items,
            page=page.page,
            size=page.size,
            total=page.total,
            total_pages=page.total_pages,
            has_next=page.has_next,
        )
