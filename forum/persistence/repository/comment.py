"""PostgreSQL implementation of Comment repository."""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, CommentSort, PostId
from forum.persistence.mappers import comment_to_dict, row_to_comment
from forum.persistence.repository.votable import PostgresVotableStore
from forum.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self._store = PostgresVotableStore(
            session, comments_table, "comment", row_to_comment, comment_to_dict
        )

    def _order_by(self, sort: CommentSort):
        # NEW is the only ordering; id breaks created_at ties so pages are stable
        return (comments_table.c.created_at.asc(), comments_table.c.id.asc())

    async def find_by_id(self, entity_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return await self._store.find_by_id(entity_id)

    async def save(self, entity: Comment) -> Comment:
        """Save a comment (create or optimistic update)."""
        return await self._store.save(entity)

    async def find_roots(
        self,
        post_id: PostId,
        sort: CommentSort = CommentSort.NEW,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find a page of top-level comments on a post."""
        stmt = (
            select(comments_table)
            .where(
                comments_table.c.post_id == post_id,
                comments_table.c.parent_id.is_(None),
            )
            .order_by(*self._order_by(sort))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_roots(self, post_id: PostId) -> int:
        """Count top-level comments on a post."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(
                comments_table.c.post_id == post_id,
                comments_table.c.parent_id.is_(None),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_replies(
        self,
        post_id: PostId,
        parent_id: CommentId,
        sort: CommentSort = CommentSort.NEW,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find a page of direct replies to a comment."""
        stmt = (
            select(comments_table)
            .where(
                comments_table.c.post_id == post_id,
                comments_table.c.parent_id == parent_id,
            )
            .order_by(*self._order_by(sort))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_replies(self, post_id: PostId, parent_id: CommentId) -> int:
        """Count direct replies to a comment."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(
                comments_table.c.post_id == post_id,
                comments_table.c.parent_id == parent_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_replies_by_parents(
        self, parent_ids: Sequence[CommentId]
    ) -> Dict[CommentId, int]:
        """Count direct replies for several comments (batch query)."""
        if not parent_ids:
            return {}

        stmt = (
            select(comments_table.c.parent_id, func.count().label("reply_count"))
            .where(comments_table.c.parent_id.in_(parent_ids))
            .group_by(comments_table.c.parent_id)
        )
        result = await self.session.execute(stmt)
        return {
            CommentId(row.parent_id): row.reply_count for row in result.fetchall()
        }
