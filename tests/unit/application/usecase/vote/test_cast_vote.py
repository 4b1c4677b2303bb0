"""Unit tests for CastVoteUseCase and CancelVoteUseCase."""

from uuid import uuid4

import pytest

from forum.application.usecase.vote import (
    CancelVoteRequest,
    CancelVoteUseCase,
    CastVoteRequest,
    CastVoteUseCase,
)
from forum.domain.error import NotFoundError
from forum.domain.model import Comment
from forum.domain.repository import CommentRepository, PostRepository
from forum.domain.value import UserId, VotableType
from tests.conftest import make_post, register_member
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_upvote_post(self, unit_env):
        """Upvoting a post returns the new vote and counters."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        voter_id = await register_member(unit_env)

        request = CastVoteRequest(
            votable_type=VotableType.POST,
            votable_id=str(post.id),
            user_id=str(voter_id),
            direction="up",
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.votable_type == VotableType.POST
        assert response.votable_id == str(post.id)
        assert response.previous == 0
        assert response.current == 1
        assert response.up_count == 1
        assert response.score == 1
        assert response.changed

    @pytest.mark.asyncio
    async def test_downvote_comment(self, unit_env):
        """Downvoting a comment routes to the comment's counters."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_repo.save(make_post())
        comment = await comment_repo.save(
            Comment.create_root(post.id, UserId(uuid4()), "Comment")
        )
        voter_id = await register_member(unit_env)

        request = CastVoteRequest(
            votable_type=VotableType.COMMENT,
            votable_id=str(comment.id),
            user_id=str(voter_id),
            direction="down",
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.current == -1
        assert response.down_count == 1
        assert response.score == -1

    def test_invalid_direction_rejected_by_request_model(self):
        with pytest.raises(ValueError):
            CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(uuid4()),
                user_id=str(uuid4()),
                direction="sideways",
            )

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        request = CastVoteRequest(
            votable_type=VotableType.POST,
            votable_id=str(uuid4()),
            user_id=str(uuid4()),
            direction="up",
        )

        with pytest.raises(NotFoundError):
            await use_case.execute(request)


class TestCancelVoteUseCase:
    """Tests for CancelVoteUseCase."""

    @pytest.mark.asyncio
    async def test_cancel_existing_vote(self, unit_env):
        """Cancelling clears the vote and restores the counters."""
        # Arrange
        cast = await unit_env.get(CastVoteUseCase)
        cancel = await unit_env.get(CancelVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        user_id = str(await register_member(unit_env))

        await cast.execute(
            CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(post.id),
                user_id=user_id,
                direction="down",
            )
        )

        # Act
        response = await cancel.execute(
            CancelVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(post.id),
                user_id=user_id,
            )
        )

        # Assert
        assert response.previous == -1
        assert response.current == 0
        assert response.down_count == 0
        assert response.changed

    @pytest.mark.asyncio
    async def test_cancel_without_vote_reports_unchanged(self, unit_env):
        cancel = await unit_env.get(CancelVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        voter_id = await register_member(unit_env)

        response = await cancel.execute(
            CancelVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(post.id),
                user_id=str(voter_id),
            )
        )

        assert not response.changed
        assert response.current == 0
