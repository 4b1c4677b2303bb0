"""Cancel vote use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import VoteService
from forum.domain.value import UserId, VotableType

from .cast_vote import VoteResponse


class CancelVoteRequest(BaseModel):
    """Cancel vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class CancelVoteUseCase:
    """Use case for removing a vote from a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cancel vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CancelVoteRequest) -> VoteResponse:
        """Execute cancel vote flow.

        Cancelling without an existing vote succeeds with ``changed=False``.

        Args:
            request: Cancel vote request

        Returns:
            Vote state and counters
        """
        result = await self.vote_service.cancel_vote(
            request.votable_type,
            UUID(request.votable_id),
            UserId(UUID(request.user_id)),
        )
        return VoteResponse.from_result(result)
