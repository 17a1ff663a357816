"""Unit tests for RegisterUseCase."""

import pytest

from roost.application.usecase.auth import RegisterRequest, RegisterUseCase
from roost.config import StorageSettings
from roost.domain.error import ConflictError, ForbiddenError, ValidationError
from roost.domain.message import MessageKey
from roost.domain.repository import UserRepository
from roost.domain.service import FileStore, JWTService, Upload
from tests.factories import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ICON = Upload(filename="me.png", content_type="image/png", data=b"\x89PNG")


class TestRegisterUseCase:
    """Tests for RegisterUseCase."""

    @pytest.mark.asyncio
    async def test_anonymous_registration_issues_token(self, unit_env):
        """The token identifies the new account."""
        # Arrange
        use_case = await unit_env.get(RegisterUseCase)
        jwt_service = await unit_env.get(JWTService)

        # Act
        response = await use_case.execute(
            RegisterRequest(handle="Alice", email="alice@example.com")
        )

        # Assert
        assert response.user.handle == "alice"
        assert response.user.display_name == "alice"
        assert response.token is not None
        assert jwt_service.get_user_id_from_token(response.token) == response.user.id

    @pytest.mark.asyncio
    async def test_default_icon_without_upload(self, unit_env):
        use_case = await unit_env.get(RegisterUseCase)
        settings = await unit_env.get(StorageSettings)

        response = await use_case.execute(
            RegisterRequest(handle="alice", email="alice@example.com")
        )

        assert response.user.icon == settings.default_user_icon

    @pytest.mark.asyncio
    async def test_admin_registration_keeps_admin_session(self, unit_env):
        """Admins may create accounts but receive no token for them."""
        # Arrange
        use_case = await unit_env.get(RegisterUseCase)
        users = await unit_env.get(UserRepository)
        admin = await users.add(make_user("admin", is_admin=True))

        # Act
        response = await use_case.execute(
            RegisterRequest(
                viewer_id=str(admin.id), handle="bob", email="bob@example.com"
            )
        )

        # Assert
        assert response.token is None
        assert response.user.email == "bob@example.com"

    @pytest.mark.asyncio
    async def test_signed_in_user_cannot_register(self, unit_env):
        use_case = await unit_env.get(RegisterUseCase)
        users = await unit_env.get(UserRepository)
        alice = await users.add(make_user("alice"))

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                RegisterRequest(
                    viewer_id=str(alice.id), handle="bob", email="bob@example.com"
                )
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "handle,email",
        [("a", "a@example.com"), ("has space", "x@example.com"), ("alice", "nope")],
    )
    async def test_malformed_input_is_rejected(self, unit_env, handle, email):
        use_case = await unit_env.get(RegisterUseCase)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(RegisterRequest(handle=handle, email=email))

        assert exc_info.value.key == MessageKey.INVALID_REQUEST

    @pytest.mark.asyncio
    async def test_icon_is_removed_when_handle_is_taken(self, unit_env):
        """A conflicting registration leaves no stored file behind."""
        # Arrange
        use_case = await unit_env.get(RegisterUseCase)
        store = await unit_env.get(FileStore)
        await use_case.execute(RegisterRequest(handle="alice", email="a@example.com"))

        # Act
        with pytest.raises(ConflictError) as exc_info:
            await use_case.execute(
                RegisterRequest(handle="alice", email="b@example.com", icon=ICON)
            )

        # Assert
        assert exc_info.value.key == MessageKey.USER_HANDLE_CONFLICT
        assert store.files == {}

    @pytest.mark.asyncio
    async def test_icon_is_stored_under_users(self, unit_env):
        use_case = await unit_env.get(RegisterUseCase)
        store = await unit_env.get(FileStore)

        response = await use_case.execute(
            RegisterRequest(handle="alice", email="a@example.com", icon=ICON)
        )

        assert response.user.icon.startswith("/content/users/alice_")
        assert list(store.files) == [response.user.icon]
