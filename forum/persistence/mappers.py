"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from forum.domain.model import Comment, Member, Post, Vote
from forum.domain.value import (
    CommentBody,
    CommentId,
    CommentStatus,
    CommunityId,
    DisplayName,
    PostId,
    PostStatus,
    UserId,
    VotableType,
    VoteId,
    VoteValue,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_member(row: Dict[str, Any]) -> Member:
    """Convert database row to Member domain model."""
    return Member(
        id=UserId(_uuid(row["id"])),
        display_name=DisplayName(row["display_name"]),
    )


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        status=PostStatus(row["status"]),
        up_count=row["up_count"],
        down_count=row["down_count"],
        comment_count=row["comment_count"],
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = post.model_dump()
    data["status"] = post.status.value
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        body=CommentBody(row["body"]),
        parent_id=CommentId(_uuid(parent_id)) if parent_id else None,
        depth=row["depth"],
        status=CommentStatus(row["status"]),
        up_count=row["up_count"],
        down_count=row["down_count"],
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump()
    data["body"] = comment.body.root
    data["status"] = comment.status.value
    return data


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        voter_id=UserId(_uuid(row["voter_id"])),
        value=VoteValue(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    data = vote.model_dump()
    data["votable_type"] = vote.votable_type.value
    data["value"] = int(vote.value)
    return data
