"""Unit tests for NestService."""

import pydantic
import pytest

from roost.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from roost.domain.message import MessageKey
from roost.domain.repository import NestRepository, UserRepository
from roost.domain.service import NestService
from roost.domain.value import NestTitle
from tests.factories import make_nest, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ICON = "/content/assets/defaults/nest_256.png"


class TestCreateNest:
    """Tests for nest creation."""

    @pytest.mark.asyncio
    async def test_creator_becomes_moderator(self, unit_env):
        # Arrange
        nest_service = await unit_env.get(NestService)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))

        # Act
        nest = await nest_service.create(alice, NestTitle("golang"), None, None, ICON)

        # Assert
        assert nest.moderator_id == alice.id
        assert nest.display_name == "golang"
        assert nest.description == ""

    @pytest.mark.asyncio
    async def test_duplicate_title_conflicts(self, unit_env):
        """Titles are unique regardless of case."""
        # Arrange
        nest_service = await unit_env.get(NestService)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))
        await nest_service.create(alice, NestTitle("golang"), None, None, ICON)

        # Act / Assert
        with pytest.raises(ConflictError) as exc_info:
            await nest_service.create(alice, NestTitle("GoLang"), None, None, ICON)

        assert exc_info.value.key == MessageKey.NEST_TITLE_CONFLICT

    @pytest.mark.asyncio
    async def test_anonymous_cannot_create(self, unit_env):
        nest_service = await unit_env.get(NestService)

        with pytest.raises(UnauthorizedError):
            await nest_service.create(None, NestTitle("golang"), None, None, ICON)

    @pytest.mark.asyncio
    async def test_banned_user_cannot_create(self, unit_env):
        nest_service = await unit_env.get(NestService)
        banned = make_user("banned", is_banned=True)

        with pytest.raises(ForbiddenError) as exc_info:
            await nest_service.create(banned, NestTitle("golang"), None, None, ICON)

        assert exc_info.value.key == MessageKey.USER_BANNED


class TestUpdateNest:
    """Tests for nest edits."""

    @pytest.mark.asyncio
    async def test_only_moderator_or_admin_may_update(self, unit_env):
        # Arrange
        nest_service = await unit_env.get(NestService)
        users = await unit_env.get(UserRepository)
        nests = await unit_env.get(NestRepository)
        moderator = await users.add(make_user("modo"))
        admin = await users.add(make_user("admin", is_admin=True))
        stranger = await users.add(make_user("stranger"))
        nest = await nests.add(make_nest(moderator))

        # Act / Assert
        assert (await nest_service.check_can_update(moderator, nest.id)).id == nest.id
        assert (await nest_service.check_can_update(admin, nest.id)).id == nest.id
        with pytest.raises(ForbiddenError):
            await nest_service.check_can_update(stranger, nest.id)

    @pytest.mark.asyncio
    async def test_update_keeps_absent_fields(self, unit_env):
        # Arrange
        nest_service = await unit_env.get(NestService)
        nests = await unit_env.get(NestRepository)
        nest = await nests.add(make_nest(None, description="old"))

        # Act
        updated = await nest_service.update(nest, description=" Gophers ")

        # Assert
        assert updated.description == "Gophers"
        assert updated.display_name == nest.display_name
        assert updated.icon == nest.icon

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field,value", [("display_name", "n" * 51), ("description", "d" * 501)]
    )
    async def test_oversized_fields_are_rejected(self, unit_env, field, value):
        # Arrange
        nest_service = await unit_env.get(NestService)
        nests = await unit_env.get(NestRepository)
        nest = await nests.add(make_nest(None))

        # Act
        with pytest.raises(pydantic.ValidationError):
            await nest_service.update(nest, **{field: value})

        # Assert
        stored = await nests.find_by_id(nest.id)
        assert stored == nest


class TestFindNests:
    """Tests for nest lookups."""

    @pytest.mark.asyncio
    async def test_get_by_title_is_case_insensitive(self, unit_env):
        nest_service = await unit_env.get(NestService)
        nests = await unit_env.get(NestRepository)
        nest = await nests.add(make_nest(None, "golang"))

        found = await nest_service.get_by_title("GOLANG")

        assert found.id == nest.id

    @pytest.mark.asyncio
    async def test_unknown_title_is_not_found(self, unit_env):
        nest_service = await unit_env.get(NestService)

        with pytest.raises(NotFoundError) as exc_info:
            await nest_service.get_by_title("rustlang")

        assert exc_info.value.key == MessageKey.NEST_NOT_FOUND

    @pytest.mark.asyncio
    async def test_list_moderated_by(self, unit_env):
        # Arrange
        nest_service = await unit_env.get(NestService)
        users = await unit_env.get(UserRepository)
        nests = await unit_env.get(NestRepository)
        alice = await users.add(make_user("alice"))
        await nests.add(make_nest(alice, "golang"))
        await nests.add(make_nest(alice, "python"))
        await nests.add(make_nest(None, "orphans"))

        # Act
        moderated = await nest_service.list_moderated_by(alice)

        # Assert
        assert sorted(nest.title.root for nest in moderated) == ["golang", "python"]
