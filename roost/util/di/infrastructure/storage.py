"""Upload storage infrastructure providers."""

from dishka import Scope, provide

from roost.adapter.storage import InMemoryFileStore, LocalFileStore
from roost.config import StorageSettings
from roost.domain.service import FileStore
from roost.util.di.base import ProviderBase


class StorageProvider(ProviderBase):
    """Storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production storage provider writing under the configured root."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_file_store(self, storage_settings: StorageSettings) -> FileStore:
        """Provide the disk-backed file store."""
        return LocalFileStore(storage_settings)


class MockStorageProvider(StorageProvider):
    """Mock storage provider keeping uploads in memory."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_file_store(self, storage_settings: StorageSettings) -> FileStore:
        """Provide an in-memory file store with the configured public prefix."""
        return InMemoryFileStore(public_prefix=storage_settings.public_prefix)
