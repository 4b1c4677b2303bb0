"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from forum.application.usecase.vote import (
    CancelVoteRequest,
    CancelVoteUseCase,
    CastVoteRequest,
    CastVoteUseCase,
    VoteResponse,
)
from forum.domain.error import DomainError
from forum.domain.service import JWTService
from forum.domain.value import VotableType
from forum.interface.error import bad_request, to_http_exception, unauthenticated

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


async def _cast(
    votable_type: VotableType,
    votable_id: str,
    direction: str,
    use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> VoteResponse:
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise unauthenticated("vote")

    try:
        request = CastVoteRequest(
            votable_type=votable_type,
            votable_id=votable_id,
            user_id=str(user_id),
            direction=direction,
        )
        return await use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


async def _cancel(
    votable_type: VotableType,
    votable_id: str,
    use_case: CancelVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> VoteResponse:
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise unauthenticated("remove a vote")

    try:
        request = CancelVoteRequest(
            votable_type=votable_type,
            votable_id=votable_id,
            user_id=str(user_id),
        )
        return await use_case.execute(request)
    except DomainError as e:
        raise to_http_exception(e)
    except ValueError as e:
        raise bad_request(e)


@router.post("/posts/{post_id}/vote/up", response_model=VoteResponse)
async def upvote_post(
    post_id: str,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Upvote a post, or remove an existing upvote.

    Requires authentication.
    """
    return await _cast(
        VotableType.POST, post_id, "up", cast_vote_use_case, jwt_service, auth_token
    )


@router.post("/posts/{post_id}/vote/down", response_model=VoteResponse)
async def downvote_post(
    post_id: str,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Downvote a post, or remove an existing downvote.

    Requires authentication.
    """
    return await _cast(
        VotableType.POST, post_id, "down", cast_vote_use_case, jwt_service, auth_token
    )


@router.delete("/posts/{post_id}/vote", response_model=VoteResponse)
async def cancel_post_vote(
    post_id: str,
    cancel_vote_use_case: FromDishka[CancelVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Remove the caller's vote from a post.

    Requires authentication.
    """
    return await _cancel(
        VotableType.POST, post_id, cancel_vote_use_case, jwt_service, auth_token
    )


@router.post("/comments/{comment_id}/vote/up", response_model=VoteResponse)
async def upvote_comment(
    comment_id: str,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Upvote a comment, or remove an existing upvote.

    Requires authentication.
    """
    return await _cast(
        VotableType.COMMENT,
        comment_id,
        "up",
        cast_vote_use_case,
        jwt_service,
        auth_token,
    )


@router.post("/comments/{comment_id}/vote/down", response_model=VoteResponse)
async def downvote_comment(
    comment_id: str,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Downvote a comment, or remove an existing downvote.

    Requires authentication.
    """
    return await _cast(
        VotableType.COMMENT,
        comment_id,
        "down",
        cast_vote_use_case,
        jwt_service,
        auth_token,
    )


@router.delete("/comments/{comment_id}/vote", response_model=VoteResponse)
async def cancel_comment_vote(
    comment_id: str,
    cancel_vote_use_case: FromDishka[CancelVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Remove the caller's vote from a comment.

    Requires authentication.
    """
    return await _cancel(
        VotableType.COMMENT, comment_id, cancel_vote_use_case, jwt_service, auth_token
    )
