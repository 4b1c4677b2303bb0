"""Member directory interface.

Communities, bans and moderator assignments are administered elsewhere;
the forum core only reads them through this narrow interface.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from forum.domain.model.member import Member
from forum.domain.value import PostId, UserId


class MemberDirectory(ABC):
    """Read-only access to members and their community standing."""

    @abstractmethod
    async def find_by_ids(self, member_ids: Sequence[UserId]) -> List[Member]:
        """Find members by ID (batch query).

        Args:
            member_ids: Member IDs to look up

        Returns:
            The members that exist, in no particular order
        """
        pass

    @abstractmethod
    async def can_participate(self, post_id: PostId, member_id: UserId) -> bool:
        """Check whether a member may vote or comment on a post.

        Args:
            post_id: The post being acted on
            member_id: The acting member

        Returns:
            False if the member is banned from the post's community
        """
        pass

    @abstractmethod
    async def is_moderator(self, post_id: PostId, member_id: UserId) -> bool:
        """Check whether a member moderates the post's community.

        Args:
            post_id: The post being acted on
            member_id: The acting member

        Returns:
            True if the member is an admin or moderator of the community
        """
        pass
