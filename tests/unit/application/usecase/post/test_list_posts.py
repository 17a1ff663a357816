"""Unit tests for ListPostsUseCase."""

from uuid import uuid4

import pytest

from roost.application.usecase.post import ListPostsRequest, ListPostsUseCase
from roost.domain.error import NotFoundError, ValidationError
from roost.domain.message import MessageKey
from roost.domain.repository import (
    NestRepository,
    PostRepository,
    PostSortOrder,
    UserRepository,
)
from roost.domain.service import VoteService
from roost.domain.value import UserId, VoteValue
from tests.factories import make_nest, make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListPostsUseCase:
    """Tests for ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_popular_sort_and_viewer_vote(self, unit_env):
        """Higher scores come first; the viewer's own vote is flagged."""
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        vote_service = await unit_env.get(VoteService)
        users = await unit_env.get(UserRepository)
        nests = await unit_env.get(NestRepository)
        posts = await unit_env.get(PostRepository)
        alice = await users.add(make_user("alice"))
        nest = await nests.add(make_nest(alice))
        quiet = await posts.add(make_post(alice, nest, "Quiet"))
        loved = await posts.add(make_post(alice, nest, "Loved"))
        await vote_service.cast(loved.id, alice.id, VoteValue.UP)
        await vote_service.cast(loved.id, UserId(uuid4()), VoteValue.UP)

        # Act
        response = await use_case.execute(
            ListPostsRequest(viewer_id=str(alice.id), sort=PostSortOrder.POPULAR)
        )

        # Assert
        assert [post.id for post in response.items] == [loved.id, quiet.id]
        assert response.items[0].votes == 2
        assert response.items[0].has_voted is True
        assert response.items[0].viewer_vote == 1
        assert response.items[1].has_voted is False

    @pytest.mark.asyncio
    async def test_page_past_the_end_returns_last_page(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        nests = await unit_env.get(NestRepository)
        posts = await unit_env.get(PostRepository)
        nest = await nests.add(make_nest(None))
        for index in range(3):
            await posts.add(make_post(None, nest, f"Post {index}"))

        # Act
        response = await use_case.execute(ListPostsRequest(page=5, limit=2))

        # Assert
        assert response.pagination.page_number == 2
        assert response.pagination.total_pages == 2
        assert response.pagination.total_items == 3
        assert len(response.items) == 1

    @pytest.mark.asyncio
    async def test_short_nest_title_is_rejected(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(ListPostsRequest(nest_title="go"))

        assert exc_info.value.key == MessageKey.QUERY_TOO_SMALL

    @pytest.mark.asyncio
    async def test_unknown_author_is_not_found(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)

        with pytest.raises(NotFoundError) as exc_info:
            await use_case.execute(ListPostsRequest(author_handle="nobody"))

        assert exc_info.value.key == MessageKey.USER_NOT_FOUND

    @pytest.mark.asyncio
    async def test_banned_author_is_redacted(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListPostsUseCase)
        users = await unit_env.get(UserRepository)
        nests = await unit_env.get(NestRepository)
        posts = await unit_env.get(PostRepository)
        banned = await users.add(make_user("banned", is_banned=True))
        nest = await nests.add(make_nest(None))
        await posts.add(make_post(banned, nest))

        # Act
        response = await use_case.execute(ListPostsRequest(nest_title="golang"))

        # Assert
        author = response.items[0].author
        assert author.id == banned.id
        assert author.is_banned is True
        assert author.handle is None
