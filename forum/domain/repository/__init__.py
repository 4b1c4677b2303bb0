"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from forum.domain.repository.comment import CommentRepository
from forum.domain.repository.member import MemberDirectory
from forum.domain.repository.post import PostRepository
from forum.domain.repository.transaction import TransactionManager
from forum.domain.repository.votable import VotableRepository
from forum.domain.repository.vote import VoteRepository

__all__ = [
    "VotableRepository",
    "PostRepository",
    "CommentRepository",
    "VoteRepository",
    "MemberDirectory",
    "TransactionManager",
]
