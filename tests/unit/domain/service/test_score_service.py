"""Unit tests for ScoreService."""

from uuid import uuid4

import pytest

from roost.domain.model import Vote
from roost.domain.repository import VoteRepository
from roost.domain.service import ScoreService
from roost.domain.value import PostId, UserId, VoteId, VoteValue
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def vote(post_id: PostId, value: VoteValue) -> Vote:
    return Vote(
        id=VoteId(uuid4()), post_id=post_id, user_id=UserId(uuid4()), value=value
    )


class TestScore:
    """Tests for score and scores."""

    @pytest.mark.asyncio
    async def test_score_is_upvotes_minus_downvotes(self, unit_env):
        """Three up and one down should score 2."""
        # Arrange
        score_service = await unit_env.get(ScoreService)
        vote_repo = await unit_env.get(VoteRepository)
        post_id = PostId(uuid4())
        for value in (VoteValue.UP, VoteValue.UP, VoteValue.UP, VoteValue.DOWN):
            await vote_repo.insert(vote(post_id, value))

        # Act
        score = await score_service.score(post_id)

        # Assert
        assert score == 2

    @pytest.mark.asyncio
    async def test_post_without_votes_scores_zero(self, unit_env):
        """No rows means a score of 0."""
        score_service = await unit_env.get(ScoreService)

        assert await score_service.score(PostId(uuid4())) == 0

    @pytest.mark.asyncio
    async def test_scores_fill_missing_posts_with_zero(self, unit_env):
        """Every requested post gets a score, even without votes."""
        # Arrange
        score_service = await unit_env.get(ScoreService)
        vote_repo = await unit_env.get(VoteRepository)
        voted = PostId(uuid4())
        unvoted = PostId(uuid4())
        await vote_repo.insert(vote(voted, VoteValue.DOWN))
        await vote_repo.insert(vote(voted, VoteValue.DOWN))

        # Act
        scores = await score_service.scores([voted, unvoted])

        # Assert
        assert scores == {voted: -2, unvoted: 0}

    @pytest.mark.asyncio
    async def test_scores_of_nothing_is_empty(self, unit_env):
        score_service = await unit_env.get(ScoreService)

        assert await score_service.scores([]) == {}
