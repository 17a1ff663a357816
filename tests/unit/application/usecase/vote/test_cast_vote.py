"""Unit tests for CastVoteUseCase and GetScoreUseCase."""

from uuid import uuid4

import pytest

from roost.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    GetScoreRequest,
    GetScoreUseCase,
)
from roost.domain.error import (
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from roost.domain.message import MessageKey
from roost.domain.repository import NestRepository, PostRepository, UserRepository
from roost.domain.value import VoteOutcome
from tests.factories import make_nest, make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed(env):
    users = await env.get(UserRepository)
    nests = await env.get(NestRepository)
    posts = await env.get(PostRepository)

    alice = await users.add(make_user("alice"))
    nest = await nests.add(make_nest(alice))
    post = await posts.add(make_post(alice, nest))
    return alice, post


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_vote_returns_outcome_and_score(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        alice, post = await seed(unit_env)
        viewer_id = str(alice.id)

        # Act
        added = await use_case.execute(
            CastVoteRequest(viewer_id=viewer_id, post_id=str(post.id), value=1)
        )
        flipped = await use_case.execute(
            CastVoteRequest(viewer_id=viewer_id, post_id=str(post.id), value=-1)
        )
        removed = await use_case.execute(
            CastVoteRequest(viewer_id=viewer_id, post_id=str(post.id), value=0)
        )

        # Assert
        assert (added.outcome, added.score) == (VoteOutcome.ADDED, 1)
        assert (flipped.outcome, flipped.score) == (VoteOutcome.UPDATED, -1)
        assert (removed.outcome, removed.score) == (VoteOutcome.REMOVED, 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [2, -2, 10])
    async def test_out_of_range_value_is_rejected(self, unit_env, value):
        use_case = await unit_env.get(CastVoteUseCase)
        alice, post = await seed(unit_env)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                CastVoteRequest(viewer_id=str(alice.id), post_id=str(post.id), value=value)
            )

        assert exc_info.value.key == MessageKey.INVALID_REQUEST

    @pytest.mark.asyncio
    async def test_anonymous_cannot_vote(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        _, post = await seed(unit_env)

        with pytest.raises(UnauthorizedError):
            await use_case.execute(CastVoteRequest(post_id=str(post.id), value=1))

    @pytest.mark.asyncio
    async def test_banned_user_cannot_vote(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        users = await unit_env.get(UserRepository)
        _, post = await seed(unit_env)
        banned = await users.add(make_user("banned", is_banned=True))

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                CastVoteRequest(viewer_id=str(banned.id), post_id=str(post.id), value=1)
            )

    @pytest.mark.asyncio
    async def test_unknown_post_is_not_found(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        alice, _ = await seed(unit_env)

        with pytest.raises(NotFoundError) as exc_info:
            await use_case.execute(
                CastVoteRequest(viewer_id=str(alice.id), post_id=str(uuid4()), value=1)
            )

        assert exc_info.value.key == MessageKey.POST_NOT_FOUND


class TestGetScoreUseCase:
    """Tests for GetScoreUseCase."""

    @pytest.mark.asyncio
    async def test_score_matches_post_view(self, unit_env):
        # Arrange
        cast = await unit_env.get(CastVoteUseCase)
        get_score = await unit_env.get(GetScoreUseCase)
        alice, post = await seed(unit_env)
        await cast.execute(
            CastVoteRequest(viewer_id=str(alice.id), post_id=str(post.id), value=-1)
        )

        # Act
        response = await get_score.execute(
            GetScoreRequest(viewer_id=str(alice.id), post_id=str(post.id))
        )

        # Assert
        assert response.score == -1
        assert response.post.votes == -1
        assert response.post.viewer_vote == -1

    @pytest.mark.asyncio
    async def test_anonymous_may_read_score(self, unit_env):
        get_score = await unit_env.get(GetScoreUseCase)
        _, post = await seed(unit_env)

        response = await get_score.execute(GetScoreRequest(post_id=str(post.id)))

        assert response.score == 0
        assert response.post.has_voted is False
