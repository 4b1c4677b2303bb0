"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .database import InMemoryDatabase
from .member import InMemoryMemberDirectory
from .post import InMemoryPostRepository
from .transaction import InMemoryTransactionManager
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryDatabase",
    "InMemoryCommentRepository",
    "InMemoryMemberDirectory",
    "InMemoryPostRepository",
    "InMemoryTransactionManager",
    "InMemoryVoteRepository",
]
