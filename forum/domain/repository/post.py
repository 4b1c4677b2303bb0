"""Post repository interface."""

from abc import abstractmethod
from typing import Optional

from forum.domain.model.post import Post
from forum.domain.repository.votable import VotableRepository
from forum.domain.value import PostId


class PostRepository(VotableRepository[Post]):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, entity_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            entity_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass
