"""In-memory comment repository for testing."""

from collections import Counter
from typing import Optional, Sequence

from forum.domain.model.comment import Comment
from forum.domain.repository.comment import CommentRepository
from forum.domain.value import CommentId, CommentSort, PostId
from forum.persistence.repository.inmemory.database import InMemoryDatabase
from forum.persistence.repository.inmemory.votable import save_versioned


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def _children(
        self, post_id: PostId, parent_id: Optional[CommentId], sort: CommentSort
    ) -> list[Comment]:
        comments = [
            c
            for c in self._db.comments.values()
            if c.post_id == post_id and c.parent_id == parent_id
        ]
        # Sort by created_at ascending (NEW), id as tie-breaker
        comments.sort(key=lambda c: (c.created_at, str(c.id)))
        return comments

    async def find_by_id(self, entity_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._db.comments.get(entity_id)

    async def save(self, entity: Comment) -> Comment:
        """Save a comment (create or optimistic update)."""
        return save_versioned(self._db.comments, entity, "comment")

    async def find_roots(
        self,
        post_id: PostId,
        sort: CommentSort = CommentSort.NEW,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find a page of top-level comments on a post."""
        return self._children(post_id, None, sort)[offset : offset + limit]

    async def count_roots(self, post_id: PostId) -> int:
        """Count top-level comments on a post."""
        return len(self._children(post_id, None, CommentSort.NEW))

    async def find_replies(
        self,
        post_id: PostId,
        parent_id: CommentId,
        sort: CommentSort = CommentSort.NEW,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find a page of direct replies to a comment."""
        return self._children(post_id, parent_id, sort)[offset : offset + limit]

    async def count_replies(self, post_id: PostId, parent_id: CommentId) -> int:
        """Count direct replies to a comment."""
        return len(self._children(post_id, parent_id, CommentSort.NEW))

    async def count_replies_by_parents(
        self, parent_ids: Sequence[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several comments (batch query)."""
        wanted = set(parent_ids)
        counts = Counter(
            c.parent_id
            for c in self._db.comments.values()
            if c.parent_id is not None and c.parent_id in wanted
        )
        return {CommentId(parent_id): n for parent_id, n in counts.items()}
