"""Vote domain service."""

from typing import Optional, Sequence
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.config import VotingSettings
from forum.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from forum.domain.model.votable import Votable
from forum.domain.model.vote import Vote, decide_vote
from forum.domain.repository import (
    CommentRepository,
    MemberDirectory,
    PostRepository,
    TransactionManager,
    VotableRepository,
    VoteRepository,
)
from forum.domain.value import CommentId, PostId, UserId, VotableType, VoteAction, VoteValue

from .base import Service, require_member, run_atomic


class VoteResult(BaseModel):
    """Outcome of a vote operation."""

    votable_type: VotableType
    votable_id: UUID
    voter_id: UserId
    previous: Optional[VoteValue]
    current: Optional[VoteValue]
    up_count: int
    down_count: int
    score: int
    changed: bool


class VoteService(Service):
    """Domain service for vote operations.

    Every cast reads the member's existing vote, decides the transition,
    writes or deletes the vote record and applies the matching counter
    delta to the target, all in one unit of work.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        member_directory: MemberDirectory,
        transactions: TransactionManager,
        voting_settings: VotingSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_repository: Post repository
            comment_repository: Comment repository
            member_directory: Ban checks for the target's community
            transactions: Unit-of-work boundary
            voting_settings: Retry configuration
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.member_directory = member_directory
        self.transactions = transactions
        self.voting_settings = voting_settings

    def _repository_for(self, votable_type: VotableType) -> VotableRepository:
        if votable_type == VotableType.POST:
            return self.post_repository
        return self.comment_repository

    async def upvote(
        self, votable_type: VotableType, votable_id: UUID, voter_id: UserId
    ) -> VoteResult:
        """Upvote an item, or remove an existing upvote.

        Raises:
            ValidationError: If voter_id is missing
            NotFoundError: If the item or the voter does not exist
            BusinessRuleViolationError: If the item does not accept votes
            NotAuthorizedError: If the voter is banned from the community
            ConcurrencyConflictError: If retries are exhausted
        """
        return await self._cast(votable_type, votable_id, voter_id, VoteAction.UP)

    async def downvote(
        self, votable_type: VotableType, votable_id: UUID, voter_id: UserId
    ) -> VoteResult:
        """Downvote an item, or remove an existing downvote."""
        return await self._cast(votable_type, votable_id, voter_id, VoteAction.DOWN)

    async def cancel_vote(
        self, votable_type: VotableType, votable_id: UUID, voter_id: UserId
    ) -> VoteResult:
        """Remove the voter's vote, whatever its direction.

        Cancelling when no vote exists is a no-op.
        """
        return await self._cast(votable_type, votable_id, voter_id, VoteAction.CANCEL)

    async def upvote_post(self, post_id: PostId, voter_id: UserId) -> VoteResult:
        """Upvote a post, or remove the voter's existing upvote.

        Args:
            post_id: Post ID
            voter_id: Voting member ID

        Returns:
            Vote transition and the post's counters after it

        Raises:
            NotFoundError: If the post or the voter does not exist
            NotVotableError: If the post is not published
            NotAuthorizedError: If the voter is banned from the community
            ConcurrencyConflictError: If retries are exhausted
        """
        return await self.upvote(VotableType.POST, post_id, voter_id)

    async def downvote_post(self, post_id: PostId, voter_id: UserId) -> VoteResult:
        """Downvote a post, or remove the voter's existing downvote.

        Args:
            post_id: Post ID
            voter_id: Voting member ID

        Returns:
            Vote transition and the post's counters after it

        Raises:
            NotFoundError: If the post or the voter does not exist
            NotVotableError: If the post is not published
            NotAuthorizedError: If the voter is banned from the community
            ConcurrencyConflictError: If retries are exhausted
        """
        return await self.downvote(VotableType.POST, post_id, voter_id)

    async def cancel_post_vote(self, post_id: PostId, voter_id: UserId) -> VoteResult:
        """Remove the voter's vote on a post.

        Args:
            post_id: Post ID
            voter_id: Voting member ID

        Returns:
            Vote transition (unchanged if there was no vote) and counters

        Raises:
            NotFoundError: If the post or the voter does not exist
            NotVotableError: If the post is not published
            NotAuthorizedError: If the voter is banned from the community
            ConcurrencyConflictError: If retries are exhausted
        """
        return await self.cancel_vote(VotableType.POST, post_id, voter_id)

    async def upvote_comment(
        self, comment_id: CommentId, voter_id: UserId
    ) -> VoteResult:
        """Upvote a comment, or remove the voter's existing upvote.

        Args:
            comment_id: Comment ID
            voter_id: Voting member ID

        Returns:
            Vote transition and the comment's counters after it

        Raises:
            NotFoundError: If the comment or the voter does not exist
            NotVotableError: If the comment is deleted
            NotAuthorizedError: If the voter is banned from the community
            ConcurrencyConflictError: If retries are exhausted
        """
        return await self.upvote(VotableType.COMMENT, comment_id, voter_id)

    async def downvote_comment(
        self, comment_id: CommentId, voter_id: UserId
    ) -> VoteResult:
        """Downvote a comment, or remove the voter's existing downvote.

        Args:
            comment_id: Comment ID
            voter_id: Voting member ID

        Returns:
            Vote transition and the comment's counters after it

        Raises:
            NotFoundError: If the comment or the voter does not exist
            NotVotableError: If the comment is deleted
            NotAuthorizedError: If the voter is banned from the community
            ConcurrencyConflictError: If retries are exhausted
        """
        return await self.downvote(VotableType.COMMENT, comment_id, voter_id)

    async def cancel_comment_vote(
        self, comment_id: CommentId, voter_id: UserId
    ) -> VoteResult:
        """Remove the voter's vote on a comment.

        Args:
            comment_id: Comment ID
            voter_id: Voting member ID

        Returns:
            Vote transition (unchanged if there was no vote) and counters

        Raises:
            NotFoundError: If the comment or the voter does not exist
            NotVotableError: If the comment is deleted
            NotAuthorizedError: If the voter is banned from the community
            ConcurrencyConflictError: If retries are exhausted
        """
        return await self.cancel_vote(VotableType.COMMENT, comment_id, voter_id)

    async def _cast(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        voter_id: Optional[UserId],
        action: VoteAction,
    ) -> VoteResult:
        if voter_id is None:
            raise ValidationError("Voter id is required", field="voter_id")

        with logfire.span(
            "vote_service.cast_vote",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            voter_id=str(voter_id),
            action=action.value,
        ):
            return await run_atomic(
                self.transactions,
                lambda: self._apply(votable_type, votable_id, voter_id, action),
                max_attempts=self.voting_settings.max_attempts,
                resource=votable_type.value,
                identifier=str(votable_id),
            )

    async def _apply(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        voter_id: UserId,
        action: VoteAction,
    ) -> VoteResult:
        repository = self._repository_for(votable_type)
        target = await repository.find_by_id(votable_id)
        if target is None:
            logfire.warn(
                "Vote on non-existent item",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
            )
            raise NotFoundError(votable_type.value, str(votable_id))

        target.ensure_votable()
        await require_member(self.member_directory, voter_id)

        if not await self.member_directory.can_participate(target.post_ref, voter_id):
            logfire.warn(
                "Vote by banned member",
                votable_id=str(votable_id),
                voter_id=str(voter_id),
            )
            raise NotAuthorizedError(
                votable_type.value, str(votable_id), str(voter_id), "vote on"
            )

        existing = await self.vote_repository.find_by_voter_and_votable(
            voter_id, votable_type, votable_id
        )
        previous = existing.value if existing else None
        current = decide_vote(previous, action)

        if previous == current:
            logfire.info(
                "No vote to cancel",
                votable_id=str(votable_id),
                voter_id=str(voter_id),
            )
            return self._result(target, voter_id, previous, current, changed=False)

        if existing is None:
            await self.vote_repository.save(
                Vote.cast(votable_type, votable_id, voter_id, current)
            )
        elif current is None:
            await self.vote_repository.delete(existing.id)
        else:
            await self.vote_repository.save(existing.with_value(current))

        updated = target.apply_vote_delta(int(previous or 0), int(current or 0))
        saved = await repository.save(updated)

        logfire.info(
            "Vote applied",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            voter_id=str(voter_id),
            previous=int(previous or 0),
            current=int(current or 0),
            up_count=saved.up_count,
            down_count=saved.down_count,
        )
        return self._result(saved, voter_id, previous, current, changed=True)

    @staticmethod
    def _result(
        target: Votable,
        voter_id: UserId,
        previous: Optional[VoteValue],
        current: Optional[VoteValue],
        changed: bool,
    ) -> VoteResult:
        return VoteResult(
            votable_type=target.votable_type,
            votable_id=target.id,
            voter_id=voter_id,
            previous=previous,
            current=current,
            up_count=target.up_count,
            down_count=target.down_count,
            score=target.score,
            changed=changed,
        )

    async def get_my_votes(
        self,
        voter_id: Optional[UserId],
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> dict[UUID, VoteValue]:
        """Look up a viewer's votes on several items.

        Args:
            voter_id: Viewer ID (None for anonymous viewers)
            votable_type: Type of items
            votable_ids: Items to check

        Returns:
            Mapping of item ID to vote for the items the viewer voted on
        """
        if voter_id is None or not votable_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_voter_and_votables(
            voter_id=voter_id,
            votable_type=votable_type,
            votable_ids=list(votable_ids),
        )
        return {vote.votable_id: vote.value for vote in votes}
