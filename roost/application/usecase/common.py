"""Request and response shapes shared by the use cases."""

from typing import Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel

from roost.config import PaginationSettings
from roost.domain.error import NotFoundError, ValidationError
from roost.domain.message import MessageKey
from roost.domain.model import User
from roost.domain.model.view import View
from roost.domain.service import Page, UserService, paginate
from roost.domain.value import UserId

T = TypeVar("T")


class ViewerRequest(BaseModel):
    """Base request carrying the session user ID (None when anonymous)."""

    viewer_id: str | None = None


class PageRequest(ViewerRequest):
    """Base request for paginated listings.

    Values are clamped by ``paginate``, never rejected.
    """

    page: int = 1
    limit: int = 20


class PaginationInfo(View):
    """Pagination block of a paged response."""

    page_number: int
    limit: int
    total_items: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginationInfo":
        return cls(
            page_number=page.page_number,
            limit=page.limit,
            total_items=page.total_items,
            total_pages=page.total_pages,
        )


class PagedResponse(View, Generic[T]):
    """A page of items with its pagination block."""

    pagination: PaginationInfo
    items: list[T]


def page_for(request: PageRequest, total: int, settings: PaginationSettings) -> Page:
    """Clamp a page request against the configured limits."""
    return paginate(
        request.page,
        request.limit,
        total,
        default_limit=settings.default_limit,
        max_limit=settings.max_limit,
    )


def parse_id(raw: str, not_found: MessageKey) -> UUID:
    """Parse a path ID; malformed IDs cannot match anything.

    Raises:
        NotFoundError: If ``raw`` is not a UUID
    """
    try:
        return UUID(raw)
    except ValueError:
        raise NotFoundError(not_found, raw)


def parse_field(raw: str, parser, field: str):
    """Parse a request field into a value object.

    Raises:
        ValidationError: INVALID_REQUEST naming the field
    """
    try:
        return parser(raw)
    except ValueError:
        raise ValidationError(MessageKey.INVALID_REQUEST, f"Invalid {field}")


async def load_viewer(
    user_service: UserService, viewer_id: Optional[str]
) -> Optional[User]:
    """Resolve the session user ID into the current viewer."""
    if not viewer_id:
        return None
    return await user_service.find_viewer(UserId(UUID(viewer_id)))
