"""Cast vote use case."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import VoteResult, VoteService
from forum.domain.value import UserId, VotableType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    direction: Literal["up", "down"]


class VoteResponse(BaseModel):
    """Vote state after an up, down or cancel request."""

    votable_type: VotableType
    votable_id: str
    previous: int  # -1, 0 or 1
    current: int  # -1, 0 or 1
    up_count: int
    down_count: int
    score: int
    changed: bool

    @classmethod
    def from_result(cls, result: VoteResult) -> "VoteResponse":
        return cls(
            votable_type=result.votable_type,
            votable_id=str(result.votable_id),
            previous=int(result.previous or 0),
            current=int(result.current or 0),
            up_count=result.up_count,
            down_count=result.down_count,
            score=result.score,
            changed=result.changed,
        )


class CastVoteUseCase:
    """Use case for upvoting or downvoting a post or comment.

    Voting again in the same direction removes the vote; voting in the
    opposite direction flips it.
    """

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> VoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Vote state and updated counters

        Raises:
            NotFoundError: If the item does not exist
            BusinessRuleViolationError: If the item does not accept votes
            NotAuthorizedError: If the voter is banned
            ConcurrencyConflictError: If retries are exhausted
        """
        votable_id = UUID(request.votable_id)
        user_id = UserId(UUID(request.user_id))

        if request.direction == "up":
            result = await self.vote_service.upvote(
                request.votable_type, votable_id, user_id
            )
        else:
            result = await self.vote_service.downvote(
                request.votable_type, votable_id, user_id
            )

        return VoteResponse.from_result(result)
