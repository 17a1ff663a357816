"""Search query rules shared by nest and user search."""

from roost.domain.error import ValidationError
from roost.domain.message import MessageKey

MIN_QUERY_LENGTH = 3


def normalize_search_query(query: str | None) -> str:
    """Trim and lowercase a search string.

    Args:
        query: Raw query from the caller

    Returns:
        Normalized query, at least ``MIN_QUERY_LENGTH`` characters long

    Raises:
        ValidationError: SEARCH_NO_QUERY if blank, QUERY_TOO_SMALL if short
    """
    normalized = (query or "").strip().lower()
    if not normalized:
        raise ValidationError(MessageKey.SEARCH_NO_QUERY)
    if len(normalized) < MIN_QUERY_LENGTH:
        raise ValidationError(MessageKey.QUERY_TOO_SMALL)
    return normalized
