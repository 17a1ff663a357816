"""Integration tests for the PostgreSQL repositories.

Run against a migrated database by setting DATABASE__URL.
"""

import os
from uuid import uuid4

import pytest

from roost.domain.error import ConflictError
from roost.domain.message import MessageKey
from roost.domain.model import Vote
from roost.domain.repository import (
    NestRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from roost.domain.value import VoteId, VoteValue
from tests.factories import make_nest, make_post, make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="DATABASE__URL is not set"
)

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


def unique(prefix: str) -> str:
    return f"{prefix}{uuid4().hex[:12]}"


async def seed_post(env):
    users = await env.get(UserRepository)
    nests = await env.get(NestRepository)
    posts = await env.get(PostRepository)

    author = await users.add(make_user(unique("u")))
    nest = await nests.add(make_nest(author, unique("n")))
    post = await posts.add(make_post(author, nest))
    return author, post


class TestUserRepositoryIntegration:
    """Unique constraints surface as domain conflicts."""

    @pytest.mark.asyncio
    async def test_duplicate_handle_is_conflict(self, integration_env):
        # Arrange
        users = await integration_env.get(UserRepository)
        handle = unique("u")
        await users.add(make_user(handle))

        # Act / Assert
        with pytest.raises(ConflictError) as exc_info:
            await users.add(make_user(handle, email=f"{unique('e')}@example.com"))

        assert exc_info.value.key == MessageKey.USER_HANDLE_CONFLICT

    @pytest.mark.asyncio
    async def test_session_survives_conflict(self, integration_env):
        """A rejected insert does not poison the rest of the request."""
        # Arrange
        users = await integration_env.get(UserRepository)
        first = await users.add(make_user(unique("u")))

        # Act
        with pytest.raises(ConflictError):
            await users.add(make_user(unique("u"), email=first.email))
        found = await users.find_by_id(first.id)

        # Assert
        assert found is not None


class TestVoteRepositoryIntegration:
    """Conditional writes on the vote ledger."""

    @pytest.mark.asyncio
    async def test_insert_is_once_per_user_and_post(self, integration_env):
        # Arrange
        votes = await integration_env.get(VoteRepository)
        author, post = await seed_post(integration_env)

        def vote() -> Vote:
            return Vote(
                id=VoteId(uuid4()),
                post_id=post.id,
                user_id=author.id,
                value=VoteValue.UP,
            )

        # Act
        first = await votes.insert(vote())
        second = await votes.insert(vote())

        # Assert
        assert first is True
        assert second is False
        assert await votes.score(post.id) == 1

    @pytest.mark.asyncio
    async def test_update_value_checks_expected(self, integration_env):
        # Arrange
        votes = await integration_env.get(VoteRepository)
        author, post = await seed_post(integration_env)
        stored = Vote(
            id=VoteId(uuid4()), post_id=post.id, user_id=author.id, value=VoteValue.UP
        )
        await votes.insert(stored)

        # Act
        stale = await votes.update_value(
            post.id, author.id, VoteValue.DOWN, VoteValue.UP, stored.updated_at
        )
        flipped = await votes.update_value(
            post.id, author.id, VoteValue.UP, VoteValue.DOWN, stored.updated_at
        )

        # Assert
        assert stale is False
        assert flipped is True
        assert await votes.scores([post.id]) == {post.id: -1}

    @pytest.mark.asyncio
    async def test_delete_reports_missing_row(self, integration_env):
        votes = await integration_env.get(VoteRepository)
        author, post = await seed_post(integration_env)

        assert await votes.delete(post.id, author.id) is False
