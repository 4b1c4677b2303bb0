"""Domain services."""

from .base import Service, is_unique_violation, require_member, run_atomic
from .comment_service import CommentService
from .comment_tree_service import CommentNode, CommentPage, CommentTreeService
from .jwt_service import JWTService
from .vote_service import VoteResult, VoteService

__all__ = [
    "CommentNode",
    "CommentPage",
    "CommentService",
    "CommentTreeService",
    "JWTService",
    "Service",
    "VoteResult",
    "VoteService",
    "is_unique_violation",
    "require_member",
    "run_atomic",
]
