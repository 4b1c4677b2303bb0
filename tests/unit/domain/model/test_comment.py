"""Unit tests for the Comment entity."""

from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from forum.domain.error import (
    ContentDeletedException,
    InvalidCommentBodyError,
    InvalidCommentDepthError,
    NotVotableError,
)
from forum.domain.model import Comment
from forum.domain.value import (
    MAX_COMMENT_BODY_LENGTH,
    CommentBody,
    CommentId,
    CommentStatus,
    PostId,
    UserId,
)
from tests.conftest import make_comment, make_post


class TestCommentCreation:
    """Tests for Comment.create_root and Comment.reply_to."""

    def test_root_has_depth_zero(self):
        """A top-level comment has no parent and depth 0."""
        comment = Comment.create_root(PostId(uuid4()), UserId(uuid4()), "Hello")

        assert comment.depth == 0
        assert comment.parent_id is None
        assert comment.is_root
        assert comment.status == CommentStatus.VISIBLE
        assert not comment.edited

    def test_reply_is_one_level_below_parent(self):
        """A reply's depth is the parent's stored depth plus one."""
        post_id = PostId(uuid4())
        parent_id = CommentId(uuid4())

        reply = Comment.reply_to(post_id, UserId(uuid4()), parent_id, 4, "Reply")

        assert reply.depth == 5
        assert reply.parent_id == parent_id
        assert not reply.is_root

    def test_reply_to_negative_depth_rejected(self):
        """A corrupt parent depth should not produce a comment."""
        with pytest.raises(InvalidCommentDepthError):
            Comment.reply_to(
                PostId(uuid4()), UserId(uuid4()), CommentId(uuid4()), -1, "Reply"
            )

    @pytest.mark.parametrize("body", ["", "   ", "\n\t"])
    def test_blank_body_rejected(self, body):
        """Blank bodies should be rejected."""
        with pytest.raises(InvalidCommentBodyError):
            Comment.create_root(PostId(uuid4()), UserId(uuid4()), body)

    def test_body_too_long_rejected(self):
        """Bodies above the stored maximum should be rejected."""
        with pytest.raises(InvalidCommentBodyError):
            Comment.create_root(
                PostId(uuid4()), UserId(uuid4()), "x" * (MAX_COMMENT_BODY_LENGTH + 1)
            )

    def test_root_with_nonzero_depth_is_invalid(self):
        """Depth 0 must coincide with having no parent."""
        with pytest.raises(PydanticValidationError):
            Comment(
                id=CommentId(uuid4()),
                post_id=PostId(uuid4()),
                author_id=UserId(uuid4()),
                body=CommentBody("Hi"),
                parent_id=None,
                depth=2,
            )


class TestCommentLifecycle:
    """Tests for edit, soft_delete and ensure_votable."""

    def test_edit_replaces_body_and_marks_edited(self):
        """Editing should change the body and updated_at."""
        comment = make_comment(make_post(), UserId(uuid4()), "Before")

        edited = comment.edit("After")

        assert edited.body.root == "After"
        assert edited.edited
        assert edited.created_at == comment.created_at

    def test_soft_delete_keeps_record(self):
        """Deleting marks the comment but keeps its body and position."""
        comment = Comment.create_root(PostId(uuid4()), UserId(uuid4()), "Text")

        deleted = comment.soft_delete()

        assert deleted.is_deleted
        assert deleted.deleted_at is not None
        assert deleted.id == comment.id
        assert deleted.depth == comment.depth

    def test_deleted_is_terminal(self):
        """A deleted comment cannot be edited, deleted again or voted on."""
        deleted = Comment.create_root(
            PostId(uuid4()), UserId(uuid4()), "Text"
        ).soft_delete()

        with pytest.raises(ContentDeletedException):
            deleted.edit("New text")
        with pytest.raises(ContentDeletedException):
            deleted.soft_delete()
        with pytest.raises(NotVotableError):
            deleted.ensure_votable()
