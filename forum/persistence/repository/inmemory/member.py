"""In-memory member directory for testing."""

from typing import Sequence

from forum.domain.model.member import Member
from forum.domain.repository.member import MemberDirectory
from forum.domain.value import CommunityId, PostId, UserId
from forum.persistence.repository.inmemory.database import InMemoryDatabase


class InMemoryMemberDirectory(MemberDirectory):
    """In-memory implementation of MemberDirectory for testing.

    Members, bans and moderator assignments are seeded directly through
    ``add_member``, ``ban`` and ``add_moderator``.
    """

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def add_member(self, member: Member) -> Member:
        self._db.members[member.id] = member
        return member

    def ban(self, community_id: CommunityId, member_id: UserId) -> None:
        self._db.bans.add((community_id, member_id))

    def add_moderator(self, community_id: CommunityId, member_id: UserId) -> None:
        self._db.moderators.add((community_id, member_id))

    async def find_by_ids(self, member_ids: Sequence[UserId]) -> list[Member]:
        """Find members by ID (batch query)."""
        return [self._db.members[m] for m in set(member_ids) if m in self._db.members]

    async def can_participate(self, post_id: PostId, member_id: UserId) -> bool:
        """Check the member is not banned from the post's community."""
        community_id = self._db.community_of(post_id)
        return (community_id, member_id) not in self._db.bans

    async def is_moderator(self, post_id: PostId, member_id: UserId) -> bool:
        """Check the member moderates the post's community."""
        community_id = self._db.community_of(post_id)
        return (community_id, member_id) in self._db.moderators
