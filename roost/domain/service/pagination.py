"""Page arithmetic shared by every list endpoint.

Out-of-range requests are clamped, never rejected: existing clients rely on
receiving the last page when they ask for one past the end.
"""

import math
from dataclasses import dataclass

DEFAULT_LIMIT = 20
MAX_LIMIT = 50


@dataclass(frozen=True)
class Page:
    """A clamped page window over ``total_items`` rows."""

    page_number: int
    limit: int
    total_items: int
    total_pages: int
    skip: int


def paginate(
    page: int,
    limit: int,
    total: int,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> Page:
    """Clamp a requested page and compute the rows to skip.

    Rules:
    - ``limit`` outside ``[1, max_limit]`` falls back to ``default_limit``
    - ``page`` below 1 becomes 1
    - ``page`` past the last page becomes the last page, or 1 when there
      are no rows

    Args:
        page: Requested 1-based page number
        limit: Requested page size
        total: Total number of rows matching the query
        default_limit: Page size used when ``limit`` is out of range
        max_limit: Largest accepted page size

    Returns:
        The clamped page window
    """
    limit = default_limit if limit < 1 or limit > max_limit else limit
    page = max(page, 1)

    total = max(total, 0)
    total_pages = math.ceil(total / limit)
    if page > total_pages:
        page = max(total_pages, 1)

    return Page(
        page_number=page,
        limit=limit,
        total_items=total,
        total_pages=total_pages,
        skip=(page - 1) * limit,
    )
