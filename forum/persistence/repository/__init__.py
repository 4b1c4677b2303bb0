"""PostgreSQL repository implementations."""

from forum.persistence.repository.comment import PostgresCommentRepository
from forum.persistence.repository.member import PostgresMemberDirectory
from forum.persistence.repository.post import PostgresPostRepository
from forum.persistence.repository.transaction import PostgresTransactionManager
from forum.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresMemberDirectory",
    "PostgresTransactionManager",
]
