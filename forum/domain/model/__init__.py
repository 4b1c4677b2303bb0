"""Domain model entities for the forum."""

from forum.domain.model.comment import Comment
from forum.domain.model.member import Member
from forum.domain.model.post import Post
from forum.domain.model.votable import Votable, vote_delta
from forum.domain.model.vote import Vote, decide_vote

__all__ = [
    "Votable",
    "Post",
    "Comment",
    "Vote",
    "Member",
    "vote_delta",
    "decide_vote",
]
