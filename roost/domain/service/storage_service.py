"""Uploaded file handling.

Files are written outside the database transaction. Callers save files
first, then persist rows, and call ``discard`` with the new URLs if
persisting fails. Files that a row stops referencing are only removed
after the request transaction commits (``discard_after_commit``).
"""

import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

import logfire

from roost.config import StorageSettings
from roost.domain.error import ValidationError
from roost.domain.message import MessageKey

from .base import Service


@dataclass(frozen=True)
class Upload:
    """An uploaded file read into memory."""

    filename: str
    content_type: str
    data: bytes


class FileStore(ABC):
    """Storage backend interface for public files."""

    @abstractmethod
    async def save(self, data: bytes, folder: str, filename: str) -> str:
        """Write a file.

        Args:
            data: File contents
            folder: Folder below the storage root
            filename: File name inside the folder

        Returns:
            Public URL of the stored file

        Raises:
            StorageError: If the file cannot be written
        """
        pass

    @abstractmethod
    async def delete(self, url: str) -> bool:
        """Delete a file by its public URL.

        Returns:
            True if a file was removed, False if it did not exist
        """
        pass


class StorageService(Service):
    """Validates uploads and stores them through a FileStore."""

    def __init__(self, file_store: FileStore, settings: StorageSettings) -> None:
        """Initialize storage service.

        Args:
            file_store: Backend that writes the bytes
            settings: Storage settings (limits and defaults)
        """
        self.file_store = file_store
        self.settings = settings
        self.pending: list[str] = []

    def validate(self, upload: Upload) -> str:
        """Check an upload against the type and size rules.

        Returns:
            Lowercase file extension

        Raises:
            ValidationError: UNSUPPORTED_FILE_TYPE or FILE_TOO_LARGE
        """
        extension = os.path.splitext(upload.filename)[1].lower()
        if extension not in self.settings.allowed_extensions:
            raise ValidationError(MessageKey.UNSUPPORTED_FILE_TYPE, extension or None)
        if "image/" not in (upload.content_type or "").lower():
            raise ValidationError(MessageKey.UNSUPPORTED_FILE_TYPE, upload.content_type)
        if not upload.data:
            raise ValidationError(MessageKey.INVALID_REQUEST, "Empty file")
        if len(upload.data) > self.settings.max_bytes:
            raise ValidationError(
                MessageKey.FILE_TOO_LARGE,
                f"Maximum allowed size is {self.settings.max_bytes // (1024 * 1024)}MB",
            )
        return extension

    async def save(self, upload: Upload, folder: str, prefix: str) -> str:
        """Validate and store one upload as ``<prefix>_<micros><ext>``.

        Returns:
            Public URL of the stored file
        """
        extension = self.validate(upload)
        filename = f"{prefix}_{time.time_ns() // 1000}{extension}"
        with logfire.span("storage_service.save", folder=folder, filename=filename):
            url = await self.file_store.save(upload.data, folder, filename)
            logfire.info("File stored", url=url, size=len(upload.data))
            return url

    async def save_many(
        self, uploads: list[Upload], folder: str, prefix: str
    ) -> list[str]:
        """Store several uploads; all or nothing.

        Every upload is validated before anything is written. If a write
        fails, files already written by this call are removed again.
        """
        for upload in uploads:
            self.validate(upload)

        saved: list[str] = []
        try:
            for index, upload in enumerate(uploads):
                saved.append(await self.save(upload, folder, f"{prefix}{index}"))
        except Exception:
            await self.discard(saved)
            raise
        return saved

    def discard_after_commit(self, urls: Iterable[str]) -> None:
        """Schedule files for removal once the request transaction commits.

        Used for files a row stops referencing. If the transaction rolls
        back the row still points at them, so they must stay.
        """
        self.pending.extend(url for url in urls if not self.is_default(url))

    async def flush_pending(self) -> None:
        """Remove the files scheduled by ``discard_after_commit``."""
        urls, self.pending = self.pending, []
        await self.discard(urls)

    async def discard(self, urls: Iterable[str]) -> None:
        """Best-effort removal of files no row references.

        Default assets are never deleted. Failures are logged, not raised,
        so the original error reaches the caller.
        """
        for url in urls:
            if self.is_default(url):
                continue
            try:
                removed = await self.file_store.delete(url)
                logfire.info("File deleted", url=url, removed=removed)
            except OSError as e:
                logfire.error("File delete failed", url=url, error=str(e))

    def is_default(self, url: str) -> bool:
        """Check whether a URL points at a shared default asset."""
        return url in (self.settings.default_user_icon, self.settings.default_nest_icon)
