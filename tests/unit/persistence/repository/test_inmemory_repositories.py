"""Unit tests for the in-memory repositories."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from forum.domain.error import ConcurrencyConflictError
from forum.domain.model import Vote
from forum.domain.value import UserId, VotableType, VoteValue
from forum.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryMemberDirectory,
    InMemoryPostRepository,
    InMemoryTransactionManager,
    InMemoryVoteRepository,
)
from tests.conftest import make_comment, make_member, make_post


class TestOptimisticSave:
    """Version checks on aggregate saves."""

    @pytest.mark.asyncio
    async def test_update_bumps_version(self):
        repo = InMemoryPostRepository(InMemoryDatabase())
        post = await repo.save(make_post())

        saved = await repo.save(post.increment_comment_count())

        assert saved.version == 1
        assert (await repo.find_by_id(post.id)).comment_count == 1

    @pytest.mark.asyncio
    async def test_stale_version_raises_conflict(self):
        """Saving a copy read before another write fails."""
        repo = InMemoryPostRepository(InMemoryDatabase())
        stale = await repo.save(make_post())
        await repo.save(stale.apply_vote_delta(0, 1))

        with pytest.raises(ConcurrencyConflictError):
            await repo.save(stale.apply_vote_delta(0, -1))

        assert (await repo.find_by_id(stale.id)).up_count == 1


class TestVoteRepository:
    """Tests for InMemoryVoteRepository."""

    @pytest.mark.asyncio
    async def test_duplicate_pair_raises_integrity_error(self):
        """Two vote records for one voter and item are refused."""
        repo = InMemoryVoteRepository(InMemoryDatabase())
        votable_id = uuid4()
        voter_id = UserId(uuid4())
        await repo.save(Vote.cast(VotableType.POST, votable_id, voter_id, 1))

        with pytest.raises(IntegrityError):
            await repo.save(Vote.cast(VotableType.POST, votable_id, voter_id, -1))

    @pytest.mark.asyncio
    async def test_same_item_id_different_type_is_separate(self):
        repo = InMemoryVoteRepository(InMemoryDatabase())
        votable_id = uuid4()
        voter_id = UserId(uuid4())

        await repo.save(Vote.cast(VotableType.POST, votable_id, voter_id, 1))
        await repo.save(Vote.cast(VotableType.COMMENT, votable_id, voter_id, -1))

        post_vote = await repo.find_by_voter_and_votable(
            voter_id, VotableType.POST, votable_id
        )
        assert post_vote.value == VoteValue.UP

    @pytest.mark.asyncio
    async def test_update_and_delete(self):
        repo = InMemoryVoteRepository(InMemoryDatabase())
        vote = await repo.save(
            Vote.cast(VotableType.POST, uuid4(), UserId(uuid4()), 1)
        )

        await repo.save(vote.with_value(VoteValue.DOWN))
        assert (await repo.find_by_votable(VotableType.POST, vote.votable_id))[
            0
        ].value == VoteValue.DOWN

        await repo.delete(vote.id)
        assert await repo.find_by_votable(VotableType.POST, vote.votable_id) == []


class TestCommentRepository:
    """Tests for InMemoryCommentRepository listings."""

    @pytest.mark.asyncio
    async def test_roots_replies_and_counts(self):
        db = InMemoryDatabase()
        repo = InMemoryCommentRepository(db)
        post = make_post()
        author_id = UserId(uuid4())

        late_root = await repo.save(make_comment(post, author_id, offset_seconds=5))
        early_root = await repo.save(make_comment(post, author_id, offset_seconds=1))
        reply = await repo.save(
            make_comment(post, author_id, parent=early_root, offset_seconds=2)
        )

        roots = await repo.find_roots(post.id)
        assert [c.id for c in roots] == [early_root.id, late_root.id]
        assert await repo.count_roots(post.id) == 2
        assert [c.id for c in await repo.find_roots(post.id, limit=1, offset=1)] == [
            late_root.id
        ]
        assert [c.id for c in await repo.find_replies(post.id, early_root.id)] == [
            reply.id
        ]
        assert await repo.count_replies(post.id, early_root.id) == 1
        assert await repo.count_replies_by_parents([early_root.id, late_root.id]) == {
            early_root.id: 1
        }


class TestMemberDirectory:
    """Tests for InMemoryMemberDirectory."""

    @pytest.mark.asyncio
    async def test_bans_and_moderators_scope_to_post_community(self):
        db = InMemoryDatabase()
        directory = InMemoryMemberDirectory(db)
        post = await InMemoryPostRepository(db).save(make_post())
        member = directory.add_member(make_member())

        assert await directory.can_participate(post.id, member.id)
        assert not await directory.is_moderator(post.id, member.id)

        directory.ban(post.community_id, member.id)
        directory.add_moderator(post.community_id, member.id)

        assert not await directory.can_participate(post.id, member.id)
        assert await directory.is_moderator(post.id, member.id)
        assert await directory.find_by_ids([member.id, UserId(uuid4())]) == [member]


class TestTransactionManager:
    """Tests for InMemoryTransactionManager."""

    @pytest.mark.asyncio
    async def test_error_restores_every_table(self):
        """A failing unit of work leaves no partial writes behind."""
        db = InMemoryDatabase()
        posts = InMemoryPostRepository(db)
        votes = InMemoryVoteRepository(db)
        transactions = InMemoryTransactionManager(db)
        post = await posts.save(make_post())

        with pytest.raises(RuntimeError):
            async with transactions.atomic():
                await votes.save(Vote.cast(VotableType.POST, post.id, UserId(uuid4()), 1))
                await posts.save(post.apply_vote_delta(0, 1))
                raise RuntimeError("boom")

        assert db.votes == {}
        assert (await posts.find_by_id(post.id)).up_count == 0
        assert (await posts.find_by_id(post.id)).version == 0

    @pytest.mark.asyncio
    async def test_success_keeps_writes(self):
        db = InMemoryDatabase()
        posts = InMemoryPostRepository(db)
        transactions = InMemoryTransactionManager(db)

        async with transactions.atomic():
            post = await posts.save(make_post())

        assert await posts.find_by_id(post.id) == post
