"""Unit tests for row/model mappers."""

from uuid import uuid4

from forum.domain.model import Vote
from forum.domain.value import CommentStatus, UserId, VotableType, VoteValue
from forum.persistence.mappers import (
    comment_to_dict,
    row_to_comment,
    row_to_vote,
    vote_to_dict,
)
from tests.conftest import make_comment, make_post


class TestCommentMapping:
    """Comments are stored with primitive columns."""

    def test_comment_to_dict_uses_primitives(self):
        post = make_post()
        root = make_comment(post, UserId(uuid4()), "Hello")
        reply = make_comment(post, UserId(uuid4()), "Hi", parent=root)

        data = comment_to_dict(reply.soft_delete())

        assert data["body"] == "Hi"
        assert data["status"] == "deleted"
        assert data["parent_id"] == root.id
        assert data["depth"] == 1
        assert data["version"] == 0

    def test_row_with_string_ids(self):
        """Rows may carry UUIDs as strings."""
        post = make_post()
        comment = make_comment(post, UserId(uuid4()), "Hello")
        row = comment_to_dict(comment)
        row.update(
            id=str(row["id"]), post_id=str(row["post_id"]), author_id=str(row["author_id"])
        )

        restored = row_to_comment(row)

        assert restored == comment
        assert restored.status == CommentStatus.VISIBLE


class TestVoteMapping:
    def test_vote_value_stored_as_int(self):
        vote = Vote.cast(VotableType.COMMENT, uuid4(), UserId(uuid4()), -1)

        data = vote_to_dict(vote)

        assert data["value"] == -1
        assert data["votable_type"] == "comment"
        assert row_to_vote(data).value == VoteValue.DOWN
