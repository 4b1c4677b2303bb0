"""Vote use cases."""

from .cancel_vote import CancelVoteRequest, CancelVoteUseCase
from .cast_vote import CastVoteRequest, CastVoteUseCase, VoteResponse

__all__ = [
    "CastVoteRequest",
    "CastVoteUseCase",
    "VoteResponse",
    "CancelVoteRequest",
    "CancelVoteUseCase",
]
