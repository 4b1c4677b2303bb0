"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from forum.domain.model import Comment, Member, Post
from forum.domain.value import (
    CommentBody,
    CommentId,
    CommunityId,
    DisplayName,
    PostId,
    PostStatus,
    UserId,
)
from forum.persistence.repository.inmemory import InMemoryMemberDirectory


def make_post(
    community_id: CommunityId | None = None,
    status: PostStatus = PostStatus.PUBLISHED,
    **overrides,
) -> Post:
    """Helper function to build a post in a (new) community.

    Args:
        community_id: Community the post belongs to (random if omitted)
        status: Lifecycle status of the post
        **overrides: Any other Post field

    Returns:
        Unsaved Post
    """
    now = datetime.now()
    fields = dict(
        id=PostId(uuid4()),
        community_id=community_id or CommunityId(uuid4()),
        author_id=UserId(uuid4()),
        title="Test Post",
        status=status,
        created_at=now,
        updated_at=now,
    )
    fields.update(overrides)
    return Post(**fields)


def make_member(name: str = "someone") -> Member:
    """Helper function to build a member with a display name."""
    return Member(id=UserId(uuid4()), display_name=DisplayName(name))


async def register_member(env, name: str = "someone") -> UserId:
    """Helper function to add a member to a test env's in-memory directory."""
    directory = await env.get(InMemoryMemberDirectory)
    return directory.add_member(make_member(name)).id


def make_comment(
    post: Post,
    author_id: UserId,
    body: str = "A comment",
    parent: Comment | None = None,
    offset_seconds: int = 0,
) -> Comment:
    """Helper function to build a comment created ``offset_seconds`` after a fixed time."""
    created_at = datetime(2024, 1, 1, 12, 0, 0) + timedelta(seconds=offset_seconds)
    return Comment(
        id=CommentId(uuid4()),
        post_id=post.id,
        author_id=author_id,
        body=CommentBody(body),
        parent_id=parent.id if parent else None,
        depth=parent.depth + 1 if parent else 0,
        created_at=created_at,
        updated_at=created_at,
    )
