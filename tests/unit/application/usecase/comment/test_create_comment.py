"""Unit tests for the comment use cases."""

import pytest

from roost.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
)
from roost.domain.error import NotFoundError, UnauthorizedError
from roost.domain.message import MessageKey
from roost.domain.repository import NestRepository, PostRepository, UserRepository
from roost.domain.value import CommentRole
from tests.factories import make_nest, make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed(env):
    users = await env.get(UserRepository)
    nests = await env.get(NestRepository)
    posts = await env.get(PostRepository)

    moderator = await users.add(make_user("modo"))
    nest = await nests.add(make_nest(moderator))
    post = await posts.add(make_post(moderator, nest))
    return moderator, post


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_moderator_comment_carries_role(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)
        moderator, post = await seed(unit_env)

        # Act
        view = await use_case.execute(
            CreateCommentRequest(
                viewer_id=str(moderator.id), post_id=str(post.id), content="Welcome"
            )
        )

        # Assert
        assert view.role == CommentRole.MODERATOR
        assert view.post_id == post.id
        assert view.author.handle == "modo"

    @pytest.mark.asyncio
    async def test_anonymous_cannot_comment(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        _, post = await seed(unit_env)

        with pytest.raises(UnauthorizedError):
            await use_case.execute(
                CreateCommentRequest(post_id=str(post.id), content="Hi")
            )

    @pytest.mark.asyncio
    async def test_malformed_post_id_is_not_found(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        moderator, _ = await seed(unit_env)

        with pytest.raises(NotFoundError) as exc_info:
            await use_case.execute(
                CreateCommentRequest(
                    viewer_id=str(moderator.id), post_id="not-a-uuid", content="Hi"
                )
            )

        assert exc_info.value.key == MessageKey.POST_NOT_FOUND


class TestListCommentsUseCase:
    """Tests for ListCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_deleted_comments_are_not_listed(self, unit_env):
        # Arrange
        create = await unit_env.get(CreateCommentUseCase)
        delete = await unit_env.get(DeleteCommentUseCase)
        list_comments = await unit_env.get(ListCommentsUseCase)
        moderator, post = await seed(unit_env)
        viewer_id = str(moderator.id)
        kept = await create.execute(
            CreateCommentRequest(viewer_id=viewer_id, post_id=str(post.id), content="A")
        )
        removed = await create.execute(
            CreateCommentRequest(viewer_id=viewer_id, post_id=str(post.id), content="B")
        )
        await delete.execute(
            DeleteCommentRequest(viewer_id=viewer_id, comment_id=str(removed.id))
        )

        # Act
        response = await list_comments.execute(ListCommentsRequest(post_id=str(post.id)))

        # Assert
        assert [c.id for c in response.items] == [kept.id]
        assert response.pagination.total_items == 1
