"""Unit tests for page clamping and search query rules."""

import pytest

from roost.domain.error import ValidationError
from roost.domain.message import MessageKey
from roost.domain.service import normalize_search_query, paginate


class TestPaginate:
    """Tests for paginate."""

    @pytest.mark.parametrize("limit", [0, -5, 51, 999])
    def test_out_of_range_limit_falls_back_to_default(self, limit):
        page = paginate(1, limit, 100)

        assert page.limit == 20

    @pytest.mark.parametrize("requested", [0, -1])
    def test_page_below_one_becomes_one(self, requested):
        page = paginate(requested, 10, 100)

        assert page.page_number == 1
        assert page.skip == 0

    def test_page_past_the_end_becomes_last_page(self):
        """Skip is computed from the clamped page."""
        page = paginate(9, 10, 25)

        assert page.page_number == 3
        assert page.total_pages == 3
        assert page.skip == 20

    def test_zero_results(self):
        """No rows: page 1, zero pages."""
        page = paginate(4, 10, 0)

        assert page.page_number == 1
        assert page.total_pages == 0
        assert page.total_items == 0
        assert page.skip == 0

    def test_configured_limits(self):
        page = paginate(1, 80, 500, default_limit=25, max_limit=100)

        assert page.limit == 80
        assert page.total_pages == 7


class TestNormalizeSearchQuery:
    """Tests for normalize_search_query."""

    def test_trims_and_lowercases(self):
        assert normalize_search_query("  GoLang ") == "golang"

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_blank_query_is_rejected(self, query):
        with pytest.raises(ValidationError) as exc_info:
            normalize_search_query(query)

        assert exc_info.value.key == MessageKey.SEARCH_NO_QUERY

    def test_short_query_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            normalize_search_query(" ab ")

        assert exc_info.value.key == MessageKey.QUERY_TOO_SMALL
