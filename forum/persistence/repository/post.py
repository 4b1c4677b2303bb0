"""PostgreSQL implementation of Post repository."""

from typing import Optional

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Post
from forum.domain.repository import PostRepository
from forum.domain.value import PostId
from forum.persistence.mappers import post_to_dict, row_to_post
from forum.persistence.repository.votable import PostgresVotableStore
from forum.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self._store = PostgresVotableStore(
            session, posts_table, "post", row_to_post, post_to_dict
        )

    async def find_by_id(self, entity_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(entity_id)):
            post = await self._store.find_by_id(entity_id)
            if post is None:
                logfire.warn("Post not found", post_id=str(entity_id))
            return post

    async def save(self, entity: Post) -> Post:
        """Save a post (create or optimistic update)."""
        return await self._store.save(entity)
