"""Response envelope shared by every endpoint."""

from typing import Generic, TypeVar

from fastapi import UploadFile

from roost.domain.message import MessageBundle, MessageKey
from roost.domain.model.view import View
from roost.domain.service import Upload

T = TypeVar("T")


class Envelope(View, Generic[T]):
    """Success body: a user-facing message and the payload."""

    message: str
    content: T | None = None


def envelope(bundle: MessageBundle, key: MessageKey, content: T | None = None) -> Envelope[T]:
    """Wrap ``content`` with the bundle's text for ``key``."""
    return Envelope[T](message=bundle.text(key), content=content)


async def read_upload(file: UploadFile | None) -> Upload | None:
    """Read a multipart file into memory; empty file fields count as absent."""
    if file is None or not file.filename:
        return None
    data = await file.read()
    return Upload(
        filename=file.filename,
        content_type=file.content_type or "",
        data=data,
    )
