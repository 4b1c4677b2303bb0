"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from forum.application.usecase.comment import (
    CommentResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from forum.domain.error import DomainError
from forum.domain.service import JWTService
from forum.domain.value import (
    MAX_COMMENT_BODY_LENGTH,
    MAX_NEW_COMMENT_LENGTH,
    CommentSort,
)
from forum.interface.error import bad_request, to_http_exception, unauthenticated

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    body: str = Field(min_length=1, max_length=MAX_NEW_COMMENT_LENGTH)
    parent_comment_id: str | None = None  # Parent comment ID for replies


class UpdateCommentAPIRequest(BaseModel):
    """API request for updating a comment."""

    body: str = Field(min_length=1, max_length=MAX_COMMENT_BODY_LENGTH)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment details
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise unauthenticated("create comments")

    try:
        use_case_request = CreateCommentRequest(
            post_id=post_id,
            user_id=str(user_id),
            body=request.body,
            parent_comment_id=request.parent_comment_id,
        )
        return await create_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.get("/posts/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    parent_comment_id: str | None = Query(default=None),
    sort: CommentSort = Query(default=CommentSort.NEW),
    page: int = Query(default=0, ge=0),
    size: int | None = Query(default=None, ge=1),
    auth_token: str | None = Cookie(default=None),
) -> GetCommentsResponse:
    """Get one page of a post's comments with their first level of replies.

    Authentication is optional; signed-in viewers also get ``mine`` and
    ``my_vote`` on each comment.
    """
    try:
        request = GetCommentsRequest(
            post_id=post_id,
            parent_comment_id=parent_comment_id,
            auth_token=auth_token,
            sort=sort,
            page=page,
            size=size,
        )
        return await get_comments_use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.patch("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Update a comment's text content.

    Only the comment author can edit.
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise unauthenticated("edit comments")

    try:
        use_case_request = UpdateCommentRequest(
            comment_id=comment_id,
            user_id=str(user_id),
            body=request.body,
        )
        return await update_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.delete("/comments/{comment_id}", response_model=CommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentResponse:
    """Soft-delete a comment.

    The author or a moderator of the post's community can delete.
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise unauthenticated("delete comments")

    try:
        use_case_request = DeleteCommentRequest(
            comment_id=comment_id, user_id=str(user_id)
        )
        return await delete_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)
