"""PostgreSQL implementation of the member directory."""

from typing import List, Sequence

from sqlalchemy import and_, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Member
from forum.domain.repository import MemberDirectory
from forum.domain.value import PostId, UserId
from forum.persistence.mappers import row_to_member
from forum.persistence.tables import (
    community_bans_table,
    community_moderators_table,
    members_table,
    posts_table,
)


class PostgresMemberDirectory(MemberDirectory):
    """Reads members, bans and moderator assignments from PostgreSQL."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_ids(self, member_ids: Sequence[UserId]) -> List[Member]:
        """Find members by ID (batch query)."""
        if not member_ids:
            return []

        stmt = select(members_table).where(members_table.c.id.in_(member_ids))
        result = await self.session.execute(stmt)
        return [row_to_member(row._asdict()) for row in result.fetchall()]

    async def can_participate(self, post_id: PostId, member_id: UserId) -> bool:
        """Check the member is not banned from the post's community."""
        banned = exists().where(
            and_(
                community_bans_table.c.community_id == posts_table.c.community_id,
                community_bans_table.c.member_id == member_id,
            )
        )
        stmt = select(banned).select_from(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        return not result.scalar()

    async def is_moderator(self, post_id: PostId, member_id: UserId) -> bool:
        """Check the member moderates the post's community."""
        moderates = exists().where(
            and_(
                community_moderators_table.c.community_id
                == posts_table.c.community_id,
                community_moderators_table.c.member_id == member_id,
            )
        )
        stmt = (
            select(moderates).select_from(posts_table).where(posts_table.c.id == post_id)
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())
