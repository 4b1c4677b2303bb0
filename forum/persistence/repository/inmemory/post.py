"""In-memory post repository for testing."""

from typing import Optional

from forum.domain.model.post import Post
from forum.domain.repository.post import PostRepository
from forum.domain.value import PostId
from forum.persistence.repository.inmemory.database import InMemoryDatabase
from forum.persistence.repository.inmemory.votable import save_versioned


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    async def find_by_id(self, entity_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._db.posts.get(entity_id)

    async def save(self, entity: Post) -> Post:
        """Save a post (create or optimistic update)."""
        return save_versioned(self._db.posts, entity, "post")
