"""Unit tests for CommentService."""

from uuid import uuid4

import pydantic
import pytest

from roost.domain.error import ForbiddenError, NotFoundError, ValidationError
from roost.domain.message import MessageKey
from roost.domain.repository import NestRepository, PostRepository, UserRepository
from roost.domain.service import CommentService, paginate
from roost.domain.value import CommentId
from tests.factories import make_nest, make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed(env):
    """Create a moderator, a commenter, a nest and a post."""
    users = await env.get(UserRepository)
    nests = await env.get(NestRepository)
    posts = await env.get(PostRepository)

    moderator = await users.add(make_user("modo"))
    commenter = await users.add(make_user("commenter"))
    nest = await nests.add(make_nest(moderator))
    post = await posts.add(make_post(moderator, nest))
    return moderator, commenter, post


class TestCreateComment:
    """Tests for adding comments."""

    @pytest.mark.asyncio
    async def test_comment_is_trimmed_and_counted(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        _, commenter, post = await seed(unit_env)

        # Act
        comment = await comment_service.create(commenter, post, "  Nice post  ")

        # Assert
        assert comment.content == "Nice post"
        assert await comment_service.count_for_post(post.id) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   "])
    async def test_blank_comment_is_rejected(self, unit_env, content):
        comment_service = await unit_env.get(CommentService)
        _, commenter, post = await seed(unit_env)

        with pytest.raises(ValidationError) as exc_info:
            await comment_service.create(commenter, post, content)

        assert exc_info.value.key == MessageKey.COMMENT_EMPTY

    @pytest.mark.asyncio
    async def test_banned_user_cannot_comment(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        _, _, post = await seed(unit_env)

        with pytest.raises(ForbiddenError):
            await comment_service.create(
                make_user("banned", is_banned=True), post, "Hi"
            )


class TestEditAndDelete:
    """Tests for editing and soft-deleting comments."""

    @pytest.mark.asyncio
    async def test_only_author_edits(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        moderator, commenter, post = await seed(unit_env)
        comment = await comment_service.create(commenter, post, "Hi")

        # Act
        updated = await comment_service.update(commenter, comment.id, "Hello")

        # Assert
        assert updated.content == "Hello"
        with pytest.raises(ForbiddenError):
            await comment_service.update(moderator, comment.id, "Moderated")

    @pytest.mark.asyncio
    async def test_oversized_edit_is_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        _, commenter, post = await seed(unit_env)
        comment = await comment_service.create(commenter, post, "Hi")

        with pytest.raises(pydantic.ValidationError):
            await comment_service.update(commenter, comment.id, "x" * 5001)

    @pytest.mark.asyncio
    async def test_moderator_deletes_and_comment_disappears(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        moderator, commenter, post = await seed(unit_env)
        comment = await comment_service.create(commenter, post, "Hi")

        # Act
        await comment_service.delete(moderator, comment.id)

        # Assert
        assert await comment_service.count_for_post(post.id) == 0
        assert await comment_service.list_for_post(post.id, paginate(1, 20, 0)) == []
        with pytest.raises(NotFoundError) as exc_info:
            await comment_service.get_comment(comment.id)
        assert exc_info.value.key == MessageKey.COMMENT_NOT_FOUND

    @pytest.mark.asyncio
    async def test_stranger_cannot_delete(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        users = await unit_env.get(UserRepository)
        _, commenter, post = await seed(unit_env)
        stranger = await users.add(make_user("stranger"))
        comment = await comment_service.create(commenter, post, "Hi")

        with pytest.raises(ForbiddenError):
            await comment_service.delete(stranger, comment.id)

    @pytest.mark.asyncio
    async def test_unknown_comment_is_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        _, commenter, _ = await seed(unit_env)

        with pytest.raises(NotFoundError):
            await comment_service.update(commenter, CommentId(uuid4()), "Hi")


class TestCounts:
    """Tests for batched comment counts."""

    @pytest.mark.asyncio
    async def test_counts_fill_zero(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        posts = await unit_env.get(PostRepository)
        moderator, commenter, post = await seed(unit_env)
        quiet = await posts.add(make_post(moderator, None, "Quiet"))
        await comment_service.create(commenter, post, "One")
        await comment_service.create(commenter, post, "Two")

        # Act
        counts = await comment_service.counts_for_posts([post.id, quiet.id])

        # Assert
        assert counts == {post.id: 2, quiet.id: 0}
