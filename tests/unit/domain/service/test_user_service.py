"""Unit tests for UserService."""

from uuid import uuid4

import pydantic
import pytest

from roost.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from roost.domain.message import MessageKey
from roost.domain.repository import UserRepository
from roost.domain.service import UserService, paginate
from roost.domain.value import Handle, UserId
from tests.factories import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ICON = "/content/assets/defaults/pp_256.png"


class TestRegister:
    """Tests for account creation."""

    @pytest.mark.asyncio
    async def test_register_defaults_display_name_to_handle(self, unit_env):
        """A blank display name falls back to the handle."""
        # Arrange
        user_service = await unit_env.get(UserService)

        # Act
        user = await user_service.register(
            Handle("alice"), " Alice@Example.com ", "  ", ICON
        )

        # Assert
        assert user.display_name == "alice"
        assert user.email == "alice@example.com"
        assert user.is_admin is False
        assert user.is_banned is False

    @pytest.mark.asyncio
    async def test_duplicate_handle_conflicts(self, unit_env):
        """The second registration of a handle is rejected."""
        # Arrange
        user_service = await unit_env.get(UserService)
        await user_service.register(Handle("alice"), "a@example.com", None, ICON)

        # Act / Assert
        with pytest.raises(ConflictError) as exc_info:
            await user_service.register(Handle("alice"), "b@example.com", None, ICON)

        assert exc_info.value.key == MessageKey.USER_HANDLE_CONFLICT

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, unit_env):
        """Emails are unique regardless of case."""
        # Arrange
        user_service = await unit_env.get(UserService)
        await user_service.register(Handle("alice"), "same@example.com", None, ICON)

        # Act / Assert
        with pytest.raises(ConflictError) as exc_info:
            await user_service.register(Handle("bob"), "SAME@example.com", None, ICON)

        assert exc_info.value.key == MessageKey.USER_EMAIL_CONFLICT


class TestLookup:
    """Tests for finding users."""

    @pytest.mark.asyncio
    async def test_get_by_handle_is_case_insensitive(self, unit_env):
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))

        found = await user_service.get_by_handle("ALICE")

        assert found.id == alice.id

    @pytest.mark.asyncio
    async def test_malformed_handle_is_not_found(self, unit_env):
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError) as exc_info:
            await user_service.get_by_handle("no spaces allowed")

        assert exc_info.value.key == MessageKey.USER_NOT_FOUND

    @pytest.mark.asyncio
    async def test_unknown_session_user_is_anonymous(self, unit_env):
        """A session for a deleted account resolves to no viewer."""
        user_service = await unit_env.get(UserService)

        assert await user_service.find_viewer(UserId(uuid4())) is None

    @pytest.mark.asyncio
    async def test_get_by_email_requires_admin(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))
        admin = await users.add(make_user("admin", is_admin=True))

        # Act / Assert
        with pytest.raises(UnauthorizedError):
            await user_service.get_by_email(None, alice.email)
        with pytest.raises(ForbiddenError):
            await user_service.get_by_email(alice, alice.email)
        found = await user_service.get_by_email(admin, alice.email)

        assert found.id == alice.id

    @pytest.mark.asyncio
    async def test_list_users_requires_admin(self, unit_env):
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))

        with pytest.raises(ForbiddenError):
            await user_service.list_users(alice, paginate(1, 20, 1))


class TestUpdateProfile:
    """Tests for profile edits."""

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, unit_env):
        """Only self or an admin may edit a profile."""
        # Arrange
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))
        bob = await users.add(make_user("bob"))

        # Act / Assert
        with pytest.raises(ForbiddenError) as exc_info:
            await user_service.check_can_update(bob, alice.id)

        assert exc_info.value.key == MessageKey.FORBIDDEN_ACTION

    @pytest.mark.asyncio
    async def test_admin_can_update_anyone(self, unit_env):
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))
        admin = await users.add(make_user("admin", is_admin=True))

        target = await user_service.check_can_update(admin, alice.id)

        assert target.id == alice.id

    @pytest.mark.asyncio
    async def test_banned_user_cannot_update_self(self, unit_env):
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        banned = await users.add(make_user("banned", is_banned=True))

        with pytest.raises(ForbiddenError) as exc_info:
            await user_service.check_can_update(banned, banned.id)

        assert exc_info.value.key == MessageKey.USER_BANNED

    @pytest.mark.asyncio
    async def test_handle_change_is_rejected(self, unit_env):
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))

        with pytest.raises(ValidationError) as exc_info:
            await user_service.update_profile(alice, handle="alicia")

        assert exc_info.value.key == MessageKey.USER_HANDLE_CHANGE

    @pytest.mark.asyncio
    async def test_same_handle_is_accepted(self, unit_env):
        """Resending the current handle, in any case, is not a change."""
        # Arrange
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))

        # Act
        updated = await user_service.update_profile(
            alice, display_name=" Alice L. ", handle="Alice"
        )

        # Assert
        assert updated.display_name == "Alice L."
        stored = await users.find_by_id(alice.id)
        assert stored.display_name == "Alice L."

    @pytest.mark.asyncio
    async def test_oversized_display_name_is_rejected(self, unit_env):
        """Display names are capped at 50 characters on edit too."""
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))

        with pytest.raises(pydantic.ValidationError):
            await user_service.update_profile(alice, display_name="n" * 80)

        stored = await users.find_by_id(alice.id)
        assert stored.display_name == alice.display_name


class TestModeration:
    """Tests for ban, unban and promote."""

    @pytest.mark.asyncio
    async def test_ban_then_unban(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        admin = await users.add(make_user("admin", is_admin=True))
        alice = await users.add(make_user("alice"))

        # Act
        banned = await user_service.ban(admin, alice.id)
        unbanned = await user_service.unban(admin, alice.id)

        # Assert
        assert banned.is_banned is True
        assert unbanned.is_banned is False

    @pytest.mark.asyncio
    async def test_repeat_moderation_is_rejected(self, unit_env):
        """Each action only applies when it changes state."""
        # Arrange
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        admin = await users.add(make_user("admin", is_admin=True))
        banned = await users.add(make_user("banned", is_banned=True))
        other_admin = await users.add(make_user("root", is_admin=True))
        alice = await users.add(make_user("alice"))

        # Act / Assert
        with pytest.raises(ValidationError) as exc_info:
            await user_service.ban(admin, banned.id)
        assert exc_info.value.key == MessageKey.USER_ALREADY_BANNED

        with pytest.raises(ValidationError) as exc_info:
            await user_service.unban(admin, alice.id)
        assert exc_info.value.key == MessageKey.USER_ALREADY_UNBANNED

        with pytest.raises(ValidationError) as exc_info:
            await user_service.promote(admin, other_admin.id)
        assert exc_info.value.key == MessageKey.USER_ALREADY_ADMIN

    @pytest.mark.asyncio
    async def test_admin_cannot_moderate_self(self, unit_env):
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        admin = await users.add(make_user("admin", is_admin=True))

        with pytest.raises(ForbiddenError) as exc_info:
            await user_service.ban(admin, admin.id)

        assert exc_info.value.key == MessageKey.USER_SELF_MODERATION

    @pytest.mark.asyncio
    async def test_non_admin_cannot_promote(self, unit_env):
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))
        bob = await users.add(make_user("bob"))

        with pytest.raises(ForbiddenError):
            await user_service.promote(alice, bob.id)

    @pytest.mark.asyncio
    async def test_moderating_unknown_user_is_not_found(self, unit_env):
        user_service = await unit_env.get(UserService)
        users = await unit_env.get(UserRepository)
        admin = await users.add(make_user("admin", is_admin=True))

        with pytest.raises(NotFoundError):
            await user_service.promote(admin, UserId(uuid4()))
