"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from forum.domain.model.vote import Vote
from forum.domain.repository.vote import VoteRepository
from forum.domain.value import UserId, VotableType, VoteId
from forum.persistence.repository.inmemory.database import InMemoryDatabase


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    async def find_by_voter_and_votable(
        self,
        voter_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by voter and votable item."""
        for vote in self._db.votes.values():
            if (
                vote.voter_id == voter_id
                and vote.votable_type == votable_type
                and vote.votable_id == votable_id
            ):
                return vote
        return None

    async def find_by_voter_and_votables(
        self,
        voter_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a member's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        wanted = set(votable_ids)
        return [
            v
            for v in self._db.votes.values()
            if v.voter_id == voter_id
            and v.votable_type == votable_type
            and v.votable_id in wanted
        ]

    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> list[Vote]:
        """Find all votes for a votable item."""
        return [
            v
            for v in self._db.votes.values()
            if v.votable_type == votable_type and v.votable_id == votable_id
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If another vote exists for the same pair (duplicate)
        """
        existing = await self.find_by_voter_and_votable(
            vote.voter_id, vote.votable_type, vote.votable_id
        )
        if existing and existing.id != vote.id:
            raise IntegrityError(
                "INSERT INTO votes",
                None,
                Exception(
                    'duplicate key value violates unique constraint "unique_vote"'
                ),
            )

        self._db.votes[vote.id] = vote
        return vote

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote by ID."""
        self._db.votes.pop(vote_id, None)
