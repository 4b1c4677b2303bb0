"""Vote entity.

A vote is one member's opinion on one post or comment. Each member has
at most one vote per item; a missing record means "no vote".
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from pydantic import Field

from forum.domain.error import InvalidVoteValueError
from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, VotableType, VoteAction, VoteId, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per member per item (enforced by database unique constraint)
    - Value is +1 or -1; cancelling removes the record
    - Polymorphic reference to votable (post or comment)
    """

    id: VoteId
    votable_type: VotableType
    votable_id: UUID  # PostId or CommentId (both are UUIDs)
    voter_id: UserId
    value: VoteValue
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def cast(
        cls,
        votable_type: VotableType,
        votable_id: UUID,
        voter_id: UserId,
        value: int,
    ) -> "Vote":
        """Create a new vote record.

        Raises:
            InvalidVoteValueError: If value is not +1 or -1
        """
        if value not in (VoteValue.UP, VoteValue.DOWN):
            raise InvalidVoteValueError(value, allowed="1 or -1")
        now = datetime.now()
        return cls(
            id=VoteId(uuid4()),
            votable_type=votable_type,
            votable_id=votable_id,
            voter_id=voter_id,
            value=VoteValue(value),
            created_at=now,
            updated_at=now,
        )

    def with_value(self, value: VoteValue) -> "Vote":
        """Return a copy with the value flipped."""
        return self.model_copy(update={"value": value, "updated_at": datetime.now()})


def decide_vote(
    current: Optional[VoteValue], action: VoteAction
) -> Optional[VoteValue]:
    """Decide the vote a member holds after an action.

    Voting in the direction already held toggles the vote off, voting in
    the opposite direction flips it, and cancel always clears it.

    Args:
        current: The member's current vote, None if there is none
        action: What the member asked for

    Returns:
        The resulting vote, None when the member ends up with no vote
    """
    if action == VoteAction.CANCEL:
        return None
    wanted = VoteValue.UP if action == VoteAction.UP else VoteValue.DOWN
    if current == wanted:
        return None
    return wanted
