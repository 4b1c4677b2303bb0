"""Comment repository interface."""

from abc import abstractmethod
from typing import Dict, List, Optional, Sequence

from forum.domain.model.comment import Comment
from forum.domain.repository.votable import VotableRepository
from forum.domain.value import CommentId, CommentSort, PostId


class CommentRepository(VotableRepository[Comment]):
    """Repository for Comment entity.

    Listings include deleted comments: they keep their place in the
    tree so their replies stay reachable.
    """

    @abstractmethod
    async def find_by_id(self, entity_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            entity_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_roots(
        self,
        post_id: PostId,
        sort: CommentSort = CommentSort.NEW,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find a page of top-level comments on a post.

        Args:
            post_id: The post ID
            sort: Ordering (NEW = oldest first by created_at)
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of root comments
        """
        pass

    @abstractmethod
    async def count_roots(self, post_id: PostId) -> int:
        """Count top-level comments on a post."""
        pass

    @abstractmethod
    async def find_replies(
        self,
        post_id: PostId,
        parent_id: CommentId,
        sort: CommentSort = CommentSort.NEW,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find a page of direct replies to a comment.

        Args:
            post_id: The post the thread belongs to
            parent_id: The parent comment ID
            sort: Ordering (NEW = oldest first by created_at)
            limit: Maximum number of replies to return
            offset: Number of replies to skip

        Returns:
            List of direct replies
        """
        pass

    @abstractmethod
    async def count_replies(self, post_id: PostId, parent_id: CommentId) -> int:
        """Count direct replies to a comment."""
        pass

    @abstractmethod
    async def count_replies_by_parents(
        self, parent_ids: Sequence[CommentId]
    ) -> Dict[CommentId, int]:
        """Count direct replies for several comments (batch query).

        Args:
            parent_ids: Comments to count replies for

        Returns:
            Mapping of parent ID to reply count; parents without replies
            may be absent
        """
        pass
