"""Local filesystem file store.

Files live under ``StorageSettings.root`` and are served from
``StorageSettings.public_prefix``. Blocking file I/O runs in a worker thread.
"""

import asyncio
from pathlib import Path, PurePosixPath

import logfire

from roost.adapter.error import StorageError
from roost.config import StorageSettings
from roost.domain.service.storage_service import FileStore


class LocalFileStore(FileStore):
    """FileStore writing to a directory on the local disk."""

    def __init__(self, settings: StorageSettings) -> None:
        """Initialize the store.

        Args:
            settings: Storage settings (root directory and public prefix)
        """
        self.root = Path(settings.root).resolve()
        self.public_prefix = settings.public_prefix.rstrip("/")

    def _path_for(self, url: str) -> Path | None:
        prefix = f"{self.public_prefix}/"
        if not url.startswith(prefix):
            return None
        path = (self.root / url[len(prefix) :]).resolve()
        # Never touch anything outside the storage root
        if self.root not in path.parents:
            return None
        return path

    async def save(self, data: bytes, folder: str, filename: str) -> str:
        """Write a file below the storage root and return its public URL."""
        relative = PurePosixPath(folder.strip("/")) / PurePosixPath(filename).name
        target = self.root / relative

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            logfire.error("File write failed", path=str(target), error=str(e))
            raise StorageError(f"Could not write {relative}") from e

        return f"{self.public_prefix}/{relative.as_posix()}"

    async def delete(self, url: str) -> bool:
        """Delete a file by its public URL."""
        path = self._path_for(url)
        if path is None:
            logfire.warn("Refusing to delete file outside storage root", url=url)
            return False

        def _remove() -> bool:
            if not path.is_file():
                return False
            path.unlink()
            return True

        try:
            return await asyncio.to_thread(_remove)
        except OSError as e:
            raise StorageError(f"Could not delete {url}") from e
