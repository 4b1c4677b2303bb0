"""Unit tests for the Post aggregate."""

import pytest

from forum.domain.error import NotCommentableError, NotVotableError
from forum.domain.value import PostStatus
from tests.conftest import make_post


class TestPostStatusRules:
    """Only published posts accept votes and comments."""

    def test_published_post_accepts_votes_and_comments(self):
        post = make_post(status=PostStatus.PUBLISHED)

        post.ensure_votable()
        post.ensure_commentable()

    @pytest.mark.parametrize("status", [PostStatus.DRAFT, PostStatus.ARCHIVED])
    def test_unpublished_post_rejects_votes(self, status):
        post = make_post(status=status)

        with pytest.raises(NotVotableError):
            post.ensure_votable()

    @pytest.mark.parametrize("status", [PostStatus.DRAFT, PostStatus.ARCHIVED])
    def test_unpublished_post_rejects_comments(self, status):
        post = make_post(status=status)

        with pytest.raises(NotCommentableError):
            post.ensure_commentable()


class TestCommentCount:
    """Tests for the comment counter."""

    def test_increment_and_decrement(self):
        post = make_post(comment_count=2)

        assert post.increment_comment_count().comment_count == 3
        assert post.decrement_comment_count().comment_count == 1

    def test_decrement_never_goes_negative(self):
        post = make_post(comment_count=0)

        assert post.decrement_comment_count().comment_count == 0
