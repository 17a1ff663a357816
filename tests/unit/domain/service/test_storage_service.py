"""Unit tests for StorageService."""

import pytest

from roost.adapter.error import StorageError
from roost.adapter.storage import InMemoryFileStore
from roost.config import StorageSettings
from roost.domain.error import ValidationError
from roost.domain.message import MessageKey
from roost.domain.service import FileStore, StorageService, Upload

PNG = Upload(filename="cat.PNG", content_type="image/png", data=b"\x89PNG....")


class FailingOnSecondSave(InMemoryFileStore):
    """Accepts one file, then fails."""

    async def save(self, data, folder, filename):
        if self.files:
            raise StorageError("disk full")
        return await super().save(data, folder, filename)


@pytest.fixture
def store() -> InMemoryFileStore:
    return InMemoryFileStore()


@pytest.fixture
def storage(store) -> StorageService:
    return StorageService(file_store=store, settings=StorageSettings(max_bytes=16))


class TestValidate:
    """Upload validation rules."""

    def test_accepts_image_and_lowercases_extension(self, storage):
        assert storage.validate(PNG) == ".png"

    def test_rejects_unknown_extension(self, storage):
        upload = Upload(filename="notes.txt", content_type="image/png", data=b"x")

        with pytest.raises(ValidationError) as exc_info:
            storage.validate(upload)

        assert exc_info.value.key == MessageKey.UNSUPPORTED_FILE_TYPE

    def test_rejects_non_image_content_type(self, storage):
        upload = Upload(filename="cat.png", content_type="text/html", data=b"x")

        with pytest.raises(ValidationError) as exc_info:
            storage.validate(upload)

        assert exc_info.value.key == MessageKey.UNSUPPORTED_FILE_TYPE

    def test_rejects_oversized_file(self, storage):
        upload = Upload(filename="cat.png", content_type="image/png", data=b"x" * 17)

        with pytest.raises(ValidationError) as exc_info:
            storage.validate(upload)

        assert exc_info.value.key == MessageKey.FILE_TOO_LARGE

    def test_rejects_empty_file(self, storage):
        upload = Upload(filename="cat.png", content_type="image/png", data=b"")

        with pytest.raises(ValidationError):
            storage.validate(upload)


class TestSave:
    """Storing and compensating uploads."""

    @pytest.mark.asyncio
    async def test_save_names_file_with_prefix_and_extension(self, storage, store):
        url = await storage.save(PNG, "users", "alice")

        assert url.startswith("/content/users/alice_")
        assert url.endswith(".png")
        assert store.files[url] == PNG.data

    @pytest.mark.asyncio
    async def test_save_many_validates_everything_first(self, storage, store):
        """One bad file means nothing is written."""
        bad = Upload(filename="x.exe", content_type="image/png", data=b"x")

        with pytest.raises(ValidationError):
            await storage.save_many([PNG, bad], "posts/1", "img")

        assert store.files == {}

    @pytest.mark.asyncio
    async def test_save_many_removes_written_files_on_failure(self):
        store = FailingOnSecondSave()
        storage = StorageService(file_store=store, settings=StorageSettings())

        with pytest.raises(StorageError):
            await storage.save_many([PNG, PNG], "posts/1", "img")

        assert store.files == {}

    @pytest.mark.asyncio
    async def test_discard_keeps_default_assets(self, storage, store):
        settings = StorageSettings()
        url = await storage.save(PNG, "users", "alice")

        await storage.discard([url, settings.default_user_icon])

        assert store.files == {}
        assert storage.is_default(settings.default_user_icon)


class TestFileStore:
    """The FileStore port."""

    def test_backend_must_implement_every_method(self):
        class WriteOnlyStore(FileStore):
            async def save(self, data, folder, filename):
                return filename

        with pytest.raises(TypeError):
            WriteOnlyStore()
