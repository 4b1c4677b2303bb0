"""Unit tests for the optimistic retry loop."""

from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from forum.config import VotingSettings
from forum.domain.error import ConcurrencyConflictError, NotFoundError
from forum.domain.model import Post, Vote
from forum.domain.service import VoteService, is_unique_violation, run_atomic
from forum.domain.value import UserId, VotableType, VoteValue
from forum.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryMemberDirectory,
    InMemoryPostRepository,
    InMemoryTransactionManager,
    InMemoryVoteRepository,
)
from tests.conftest import make_member, make_post


class UniqueViolation(Exception):
    """Driver error carrying PostgreSQL's unique_violation code."""

    sqlstate = "23505"


class ForeignKeyViolation(Exception):
    """Driver error carrying PostgreSQL's foreign_key_violation code."""

    sqlstate = "23503"


class ConflictingPostRepository(InMemoryPostRepository):
    """Loses the version race on the first ``conflicts`` saves."""

    def __init__(self, db: InMemoryDatabase, conflicts: int) -> None:
        super().__init__(db)
        self.conflicts = conflicts
        self.saves = 0

    async def save(self, entity: Post) -> Post:
        self.saves += 1
        if self.saves <= self.conflicts:
            # Someone else bumped the version between our read and write
            stored = self._db.posts[entity.id]
            self._db.posts[entity.id] = stored.model_copy(
                update={"version": stored.version + 1}
            )
        return await super().save(entity)


class StaleReadVoteRepository(InMemoryVoteRepository):
    """Misses the voter's stored vote on the first lookup only."""

    def __init__(self, db: InMemoryDatabase) -> None:
        super().__init__(db)
        self.lookups = 0

    async def find_by_voter_and_votable(
        self, voter_id: UserId, votable_type: VotableType, votable_id: UUID
    ):
        self.lookups += 1
        if self.lookups == 1:
            return None
        return await super().find_by_voter_and_votable(
            voter_id, votable_type, votable_id
        )


def build_vote_service(
    db: InMemoryDatabase,
    post_repository=None,
    vote_repository=None,
    max_attempts=3,
):
    return VoteService(
        vote_repository=vote_repository or InMemoryVoteRepository(db),
        post_repository=post_repository or InMemoryPostRepository(db),
        comment_repository=InMemoryCommentRepository(db),
        member_directory=InMemoryMemberDirectory(db),
        transactions=InMemoryTransactionManager(db),
        voting_settings=VotingSettings(max_attempts=max_attempts),
    )


def add_voter(db: InMemoryDatabase) -> UserId:
    return InMemoryMemberDirectory(db).add_member(make_member("voter")).id


class TestVoteRetry:
    """Vote casts re-run against fresh state after losing a race."""

    @pytest.mark.asyncio
    async def test_conflict_once_then_succeeds(self):
        """A single lost race is retried and the vote lands exactly once."""
        # Arrange
        db = InMemoryDatabase()
        post = make_post()
        db.posts[post.id] = post
        post_repo = ConflictingPostRepository(db, conflicts=1)
        service = build_vote_service(db, post_repository=post_repo)
        voter_id = add_voter(db)

        # Act
        result = await service.upvote_post(post.id, voter_id)

        # Assert
        assert result.up_count == 1
        assert post_repo.saves == 2
        assert len(db.votes) == 1
        assert db.posts[post.id].up_count == 1

    @pytest.mark.asyncio
    async def test_exhausted_attempts_raise_conflict_and_roll_back(self):
        """Every attempt losing the race surfaces a conflict with no writes."""
        # Arrange
        db = InMemoryDatabase()
        post = make_post()
        db.posts[post.id] = post
        post_repo = ConflictingPostRepository(db, conflicts=10)
        service = build_vote_service(db, post_repository=post_repo, max_attempts=3)

        # Act & Assert
        with pytest.raises(ConcurrencyConflictError):
            await service.upvote_post(post.id, add_voter(db))

        assert post_repo.saves == 3
        assert db.votes == {}
        assert db.posts[post.id].up_count == 0

    @pytest.mark.asyncio
    async def test_same_voter_insert_race_is_decided_again(self):
        """A stale 'no vote yet' read loses the insert and is re-decided.

        The voter already has an UP vote that the first attempt does not
        see. Its insert hits the unique constraint; the retry reads the UP
        vote and flips it to DOWN instead of adding a second record.
        """
        # Arrange
        db = InMemoryDatabase()
        voter_id = add_voter(db)
        post = make_post(up_count=1)
        db.posts[post.id] = post
        existing = Vote.cast(VotableType.POST, post.id, voter_id, VoteValue.UP)
        db.votes[existing.id] = existing
        vote_repo = StaleReadVoteRepository(db)
        service = build_vote_service(db, vote_repository=vote_repo)

        # Act
        result = await service.downvote_post(post.id, voter_id)

        # Assert
        assert result.previous == VoteValue.UP
        assert result.current == VoteValue.DOWN
        assert result.up_count == 0
        assert result.down_count == 1
        assert [v.value for v in db.votes.values()] == [VoteValue.DOWN]
        assert db.posts[post.id].up_count == 0
        assert db.posts[post.id].down_count == 1
        # Stale read, duplicate check inside save, fresh read, second save
        assert vote_repo.lookups == 4

    @pytest.mark.asyncio
    async def test_unknown_voter_is_not_retried(self):
        """A missing member fails the first attempt instead of exhausting retries."""
        # Arrange
        db = InMemoryDatabase()
        post = make_post()
        db.posts[post.id] = post
        post_repo = ConflictingPostRepository(db, conflicts=0)
        service = build_vote_service(db, post_repository=post_repo)

        # Act & Assert
        with pytest.raises(NotFoundError) as exc_info:
            await service.upvote_post(post.id, UserId(uuid4()))

        assert exc_info.value.resource == "member"
        assert post_repo.saves == 0
        assert db.votes == {}


class TestRunAtomic:
    """Tests for run_atomic."""

    @pytest.mark.asyncio
    async def test_unique_violation_is_retried(self):
        """Uniqueness violations are treated like version conflicts."""
        db = InMemoryDatabase()
        attempts = []

        async def operation():
            attempts.append(1)
            if len(attempts) == 1:
                raise IntegrityError("INSERT INTO votes", None, UniqueViolation())
            return "done"

        result = await run_atomic(
            InMemoryTransactionManager(db),
            operation,
            max_attempts=3,
            resource="post",
            identifier="p1",
        )

        assert result == "done"
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_foreign_key_violation_is_not_retried(self):
        """Other integrity errors propagate unchanged on the first attempt."""
        db = InMemoryDatabase()
        attempts = []

        async def operation():
            attempts.append(1)
            raise IntegrityError(
                "INSERT INTO votes",
                None,
                ForeignKeyViolation(
                    'insert or update on table "votes" violates foreign key '
                    'constraint "votes_voter_id_fkey"'
                ),
            )

        with pytest.raises(IntegrityError):
            await run_atomic(
                InMemoryTransactionManager(db),
                operation,
                max_attempts=3,
                resource="post",
                identifier="p1",
            )

        assert len(attempts) == 1

    @pytest.mark.asyncio
    async def test_other_errors_are_not_retried(self):
        """Domain errors propagate on the first attempt."""
        db = InMemoryDatabase()
        attempts = []

        async def operation():
            attempts.append(1)
            raise NotFoundError("post", "p1")

        with pytest.raises(NotFoundError):
            await run_atomic(
                InMemoryTransactionManager(db),
                operation,
                max_attempts=3,
                resource="post",
                identifier="p1",
            )

        assert len(attempts) == 1

    @pytest.mark.asyncio
    async def test_failed_attempt_is_rolled_back(self):
        """Writes made by a failed attempt are undone before the retry."""
        db = InMemoryDatabase()
        post = make_post()

        async def operation():
            if not db.posts:
                db.posts[post.id] = post
                raise ConcurrencyConflictError("post", str(post.id))
            return len(db.posts)

        with pytest.raises(ConcurrencyConflictError):
            await run_atomic(
                InMemoryTransactionManager(db),
                operation,
                max_attempts=1,
                resource="post",
                identifier=str(post.id),
            )

        assert db.posts == {}


class TestIsUniqueViolation:
    """Tests for telling insert races apart from other constraint failures."""

    @pytest.mark.parametrize(
        ("orig", "expected"),
        [
            (UniqueViolation(), True),
            (ForeignKeyViolation(), False),
            (
                Exception('duplicate key value violates unique constraint "unique_vote"'),
                True,
            ),
            (Exception('new row violates check constraint "depth_non_negative"'), False),
        ],
    )
    def test_classification(self, orig, expected):
        error = IntegrityError("INSERT", None, orig)

        assert is_unique_violation(error) is expected

    def test_asyncpg_cause_is_inspected(self):
        """The driver's original exception is checked when the adapter hides it."""
        adapted = Exception("IntegrityError")
        adapted.__cause__ = UniqueViolation()

        assert is_unique_violation(IntegrityError("INSERT", None, adapted))
