"""Unit tests for VoteService (the vote ledger)."""

import asyncio
from uuid import uuid4

import pytest

from roost.domain.error import ConflictError, NotFoundError, ValidationError
from roost.domain.message import MessageKey
from roost.domain.repository import (
    NestRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from roost.domain.service import ScoreService, VoteService
from roost.domain.value import PostId, UserId, VoteOutcome, VoteValue
from roost.persistence.repository.inmemory import (
    InMemoryDatabase,
    InMemoryVoteRepository,
)
from tests.factories import make_nest, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def seed_post(env):
    """Create a moderator, a nest and a post; return the post."""
    users = await env.get(UserRepository)
    nests = await env.get(NestRepository)
    posts = await env.get(PostRepository)

    moderator = await users.add(make_user("modo"))
    nest = await nests.add(make_nest(moderator))
    return await posts.add(make_post(moderator, nest))


class SlowReadVoteRepository(InMemoryVoteRepository):
    """Yields to the event loop after every read so two casts interleave."""

    async def find(self, post_id, user_id):
        vote = await super().find(post_id, user_id)
        await asyncio.sleep(0)
        return vote


class TestCastTransitions:
    """Tests for each legal and illegal ledger transition."""

    @pytest.mark.asyncio
    async def test_first_upvote_adds_row(self, unit_env):
        """NoVote + 1 should insert an upvote."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await seed_post(unit_env)
        user_id = UserId(uuid4())

        # Act
        outcome = await vote_service.cast(post.id, user_id, VoteValue.UP)

        # Assert
        assert outcome == VoteOutcome.ADDED
        vote = await vote_repo.find(post.id, user_id)
        assert vote is not None
        assert vote.value == VoteValue.UP

    @pytest.mark.asyncio
    async def test_removing_missing_vote_is_rejected(self, unit_env):
        """NoVote + 0 should raise VOTE_NOT_CAST and write nothing."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await seed_post(unit_env)
        user_id = UserId(uuid4())

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            await vote_service.cast(post.id, user_id, VoteValue.NONE)

        assert exc_info.value.key == MessageKey.VOTE_NOT_CAST
        assert await vote_repo.find(post.id, user_id) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [VoteValue.UP, VoteValue.DOWN])
    async def test_repeating_same_vote_conflicts(self, unit_env, value):
        """Voted + same value should raise VOTE_ALREADY_EXISTS, not duplicate."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        database = await unit_env.get(InMemoryDatabase)
        post = await seed_post(unit_env)
        user_id = UserId(uuid4())
        await vote_service.cast(post.id, user_id, value)

        # Act & Assert
        with pytest.raises(ConflictError) as exc_info:
            await vote_service.cast(post.id, user_id, value)

        assert exc_info.value.key == MessageKey.VOTE_ALREADY_EXISTS
        assert len(database.votes) == 1

    @pytest.mark.asyncio
    async def test_flip_updates_row_in_place(self, unit_env):
        """Voted + opposite value should keep the row ID and change the value."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await seed_post(unit_env)
        user_id = UserId(uuid4())
        await vote_service.cast(post.id, user_id, VoteValue.UP)
        original = await vote_repo.find(post.id, user_id)

        # Act
        outcome = await vote_service.cast(post.id, user_id, VoteValue.DOWN)

        # Assert
        assert outcome == VoteOutcome.UPDATED
        flipped = await vote_repo.find(post.id, user_id)
        assert flipped.id == original.id
        assert flipped.value == VoteValue.DOWN
        assert flipped.created_at == original.created_at

    @pytest.mark.asyncio
    async def test_zero_removes_existing_vote(self, unit_env):
        """Voted + 0 should delete the row."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post = await seed_post(unit_env)
        user_id = UserId(uuid4())
        await vote_service.cast(post.id, user_id, VoteValue.DOWN)

        # Act
        outcome = await vote_service.cast(post.id, user_id, VoteValue.NONE)

        # Assert
        assert outcome == VoteOutcome.REMOVED
        assert await vote_repo.find(post.id, user_id) is None

    @pytest.mark.asyncio
    async def test_vote_on_missing_post_is_not_found(self, unit_env):
        """Casting on an unknown post should raise POST_NOT_FOUND."""
        # Arrange
        vote_service = await unit_env.get(VoteService)

        # Act & Assert
        with pytest.raises(NotFoundError) as exc_info:
            await vote_service.cast(PostId(uuid4()), UserId(uuid4()), VoteValue.UP)

        assert exc_info.value.key == MessageKey.POST_NOT_FOUND

    @pytest.mark.asyncio
    async def test_vote_on_deleted_post_is_not_found(self, unit_env):
        """Soft-deleted posts cannot be voted on."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await seed_post(unit_env)
        await post_repo.save(post.model_copy(update={"is_deleted": True}))

        # Act & Assert
        with pytest.raises(NotFoundError):
            await vote_service.cast(post.id, UserId(uuid4()), VoteValue.UP)


class TestScoreScenario:
    """Walks the ledger through a multi-user sequence."""

    @pytest.mark.asyncio
    async def test_golang_scenario(self, unit_env):
        """Up, down, flip and remove should give 0, -2 and -1."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        score_service = await unit_env.get(ScoreService)
        users = await unit_env.get(UserRepository)
        nests = await unit_env.get(NestRepository)
        posts = await unit_env.get(PostRepository)

        user_a = await users.add(make_user("user_a"))
        user_b = await users.add(make_user("user_b"))
        user_c = await users.add(make_user("user_c"))
        user_d = await users.add(make_user("user_d"))
        nest = await nests.add(make_nest(user_a, title="golang"))
        post = await posts.add(make_post(user_b, nest))

        # Act & Assert
        await vote_service.cast(post.id, user_c.id, VoteValue.UP)
        await vote_service.cast(post.id, user_d.id, VoteValue.DOWN)
        assert await score_service.score(post.id) == 0

        await vote_service.cast(post.id, user_c.id, VoteValue.DOWN)
        assert await score_service.score(post.id) == -2

        await vote_service.cast(post.id, user_c.id, VoteValue.NONE)
        assert await score_service.score(post.id) == -1


class TestConcurrentVotes:
    """Racing requests for the same (post, user) pair."""

    @pytest.mark.asyncio
    async def test_racing_first_votes_leave_one_row(self, unit_env):
        """Two interleaved first votes: one succeeds, one conflicts."""
        # Arrange
        database = await unit_env.get(InMemoryDatabase)
        post_repo = await unit_env.get(PostRepository)
        post = await seed_post(unit_env)
        user_id = UserId(uuid4())

        vote_service = VoteService(
            vote_repository=SlowReadVoteRepository(database),
            post_repository=post_repo,
        )

        # Act
        results = await asyncio.gather(
            vote_service.cast(post.id, user_id, VoteValue.UP),
            vote_service.cast(post.id, user_id, VoteValue.UP),
            return_exceptions=True,
        )

        # Assert
        assert results.count(VoteOutcome.ADDED) == 1
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(conflicts) == 1
        assert conflicts[0].key == MessageKey.VOTE_CONFLICT
        assert len(database.votes) == 1

    @pytest.mark.asyncio
    async def test_racing_flips_apply_once(self, unit_env):
        """Two interleaved flips from the same state: only one applies."""
        # Arrange
        database = await unit_env.get(InMemoryDatabase)
        post_repo = await unit_env.get(PostRepository)
        post = await seed_post(unit_env)
        user_id = UserId(uuid4())

        vote_service = VoteService(
            vote_repository=SlowReadVoteRepository(database),
            post_repository=post_repo,
        )
        await vote_service.cast(post.id, user_id, VoteValue.UP)

        # Act
        results = await asyncio.gather(
            vote_service.cast(post.id, user_id, VoteValue.DOWN),
            vote_service.cast(post.id, user_id, VoteValue.DOWN),
            return_exceptions=True,
        )

        # Assert
        assert results.count(VoteOutcome.UPDATED) == 1
        assert sum(isinstance(r, ConflictError) for r in results) == 1
        assert database.votes[(post.id, user_id)].value == VoteValue.DOWN


class TestFindViewerVotes:
    """Tests for find_viewer_votes."""

    @pytest.mark.asyncio
    async def test_returns_only_the_viewers_votes(self, unit_env):
        """Votes are keyed by post and limited to the given user."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post = await seed_post(unit_env)
        viewer_id = UserId(uuid4())
        other_id = UserId(uuid4())
        await vote_service.cast(post.id, viewer_id, VoteValue.DOWN)
        await vote_service.cast(post.id, other_id, VoteValue.UP)

        # Act
        votes = await vote_service.find_viewer_votes(viewer_id, [post.id])

        # Assert
        assert votes == {post.id: VoteValue.DOWN}

    @pytest.mark.asyncio
    async def test_empty_post_list_skips_lookup(self, unit_env):
        """No posts means no votes."""
        vote_service = await unit_env.get(VoteService)

        assert await vote_service.find_viewer_votes(UserId(uuid4()), []) == {}

    @pytest.mark.asyncio
    async def test_get_vote_reads_stored_row(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post = await seed_post(unit_env)
        user_id = UserId(uuid4())
        await vote_service.cast(post.id, user_id, VoteValue.UP)

        vote = await vote_service.get_vote(post.id, user_id)

        assert vote.value == VoteValue.UP
        assert await vote_service.get_vote(post.id, UserId(uuid4())) is None
