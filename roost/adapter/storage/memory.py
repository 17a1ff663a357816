"""In-memory file store for testing."""

from roost.adapter.error import StorageError
from roost.domain.service.storage_service import FileStore


class InMemoryFileStore(FileStore):
    """FileStore keeping file contents in a dict keyed by public URL.

    Set ``fail_on_save`` to make the next writes raise ``StorageError``.
    """

    def __init__(self, public_prefix: str = "/content") -> None:
        self.public_prefix = public_prefix.rstrip("/")
        self.files: dict[str, bytes] = {}
        self.fail_on_save = False

    async def save(self, data: bytes, folder: str, filename: str) -> str:
        """Store the bytes and return the public URL."""
        if self.fail_on_save:
            raise StorageError(f"Simulated write failure for {filename}")
        url = f"{self.public_prefix}/{folder.strip('/')}/{filename}"
        self.files[url] = data
        return url

    async def delete(self, url: str) -> bool:
        """Remove a stored file."""
        return self.files.pop(url, None) is not None
