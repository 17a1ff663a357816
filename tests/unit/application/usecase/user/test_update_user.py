"""Unit tests for UpdateUserUseCase."""

import pydantic
import pytest

from roost.application.usecase.user import UpdateUserRequest, UpdateUserUseCase
from roost.domain.error import ValidationError
from roost.domain.message import MessageKey
from roost.domain.repository import UserRepository
from roost.domain.service import FileStore, StorageService, Upload
from tests.factories import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

OLD_ICON = "/content/users/alice_1.png"
ICON = Upload(filename="me.png", content_type="image/png", data=b"\x89PNG")


async def seed(env):
    """Create alice with an icon that is already stored."""
    users = await env.get(UserRepository)
    store = await env.get(FileStore)

    alice = await users.add(make_user("alice", icon=OLD_ICON))
    store.files[OLD_ICON] = b"old"
    return alice


class TestUpdateUserIcon:
    """Icon replacement and compensation."""

    @pytest.mark.asyncio
    async def test_old_icon_is_kept_until_commit(self, unit_env):
        # Arrange
        use_case = await unit_env.get(UpdateUserUseCase)
        storage_service = await unit_env.get(StorageService)
        store = await unit_env.get(FileStore)
        alice = await seed(unit_env)

        # Act
        view = await use_case.execute(
            UpdateUserRequest(viewer_id=str(alice.id), user_id=str(alice.id), icon=ICON)
        )

        # Assert
        assert view.icon.startswith("/content/users/alice_")
        assert set(store.files) == {OLD_ICON, view.icon}
        assert storage_service.pending == [OLD_ICON]

    @pytest.mark.asyncio
    async def test_oversized_display_name_discards_new_icon(self, unit_env):
        """A rejected edit removes the upload and leaves the old icon alone."""
        # Arrange
        use_case = await unit_env.get(UpdateUserUseCase)
        storage_service = await unit_env.get(StorageService)
        store = await unit_env.get(FileStore)
        users = await unit_env.get(UserRepository)
        alice = await seed(unit_env)

        # Act
        with pytest.raises(pydantic.ValidationError):
            await use_case.execute(
                UpdateUserRequest(
                    viewer_id=str(alice.id),
                    user_id=str(alice.id),
                    display_name="n" * 80,
                    icon=ICON,
                )
            )

        # Assert
        assert list(store.files) == [OLD_ICON]
        assert storage_service.pending == []
        stored = await users.find_by_id(alice.id)
        assert stored.icon == OLD_ICON

    @pytest.mark.asyncio
    async def test_handle_change_discards_new_icon(self, unit_env):
        use_case = await unit_env.get(UpdateUserUseCase)
        store = await unit_env.get(FileStore)
        alice = await seed(unit_env)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(
                UpdateUserRequest(
                    viewer_id=str(alice.id),
                    user_id=str(alice.id),
                    handle="alicia",
                    icon=ICON,
                )
            )

        assert exc_info.value.key == MessageKey.USER_HANDLE_CHANGE
        assert list(store.files) == [OLD_ICON]
