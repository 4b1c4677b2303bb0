"""Shared state for the in-memory repositories."""

import copy
from dataclasses import dataclass, field
from uuid import UUID

from forum.domain.model import Comment, Member, Post, Vote
from forum.domain.value import CommentId, CommunityId, PostId, UserId, VoteId


@dataclass
class InMemoryDatabase:
    """Tables backing the in-memory repositories.

    Repositories created for the same request share one instance so
    that a transaction can snapshot and restore everything at once.
    """

    posts: dict[PostId, Post] = field(default_factory=dict)
    comments: dict[CommentId, Comment] = field(default_factory=dict)
    votes: dict[VoteId, Vote] = field(default_factory=dict)
    members: dict[UserId, Member] = field(default_factory=dict)
    bans: set[tuple[CommunityId, UserId]] = field(default_factory=set)
    moderators: set[tuple[CommunityId, UserId]] = field(default_factory=set)

    def snapshot(self) -> "InMemoryDatabase":
        """Copy every table (models are immutable, so shallow copies suffice)."""
        return InMemoryDatabase(
            posts=dict(self.posts),
            comments=dict(self.comments),
            votes=dict(self.votes),
            members=dict(self.members),
            bans=set(self.bans),
            moderators=set(self.moderators),
        )

    def restore(self, snapshot: "InMemoryDatabase") -> None:
        """Put every table back to the state of ``snapshot``."""
        for name in ("posts", "comments", "votes", "members", "bans", "moderators"):
            setattr(self, name, copy.copy(getattr(snapshot, name)))

    def community_of(self, post_id: UUID) -> CommunityId | None:
        post = self.posts.get(PostId(post_id))
        return post.community_id if post else None
