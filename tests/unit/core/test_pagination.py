"""Unit tests for the pagination calculator."""

import math

import pytest

from src.catalog.core.errors import NotFoundError, PageNotFoundError
from src.catalog.core.pagination import (
    PageWindow,
    page_count_for,
    paginate,
    parse_page_number,
)


class TestPaginate:
    """Test offset/limit computation for a requested page."""

    def test_last_page_of_twenty_five_books(self):
        """25 books at 10 per page: page 3 starts at offset 20."""
        window = paginate(25, 10, 3)

        assert window == PageWindow(page=3, page_count=3, offset=20, limit=10)

    def test_page_past_the_end_is_not_found(self):
        with pytest.raises(PageNotFoundError) as exc_info:
            paginate(25, 10, 4)

        assert exc_info.value.page == 4
        assert exc_info.value.page_count == 3

    def test_defaults_to_first_page(self):
        window = paginate(25, 10)

        assert window.page == 1
        assert window.offset == 0
        assert window.limit == 10

    @pytest.mark.parametrize("page", [0, -1, -10])
    def test_non_positive_pages_are_not_found(self, page):
        with pytest.raises(PageNotFoundError):
            paginate(25, 10, page)

    def test_empty_catalog_has_no_valid_page(self):
        """With zero books there are zero pages, so even page 1 is not found."""
        with pytest.raises(PageNotFoundError):
            paginate(0, 10, 1)

    def test_not_found_is_a_not_found_error(self):
        with pytest.raises(NotFoundError):
            paginate(5, 10, 2)

    @pytest.mark.parametrize(
        "total,size",
        [(0, 1), (1, 1), (9, 10), (10, 10), (11, 10), (25, 10), (100, 7), (3, 50)],
    )
    def test_page_count_is_ceiling(self, total, size):
        assert page_count_for(total, size) == math.ceil(total / size)

    @pytest.mark.parametrize("total,size", [(25, 10), (100, 7), (1, 1)])
    def test_every_valid_page_has_increasing_offset(self, total, size):
        page_count = page_count_for(total, size)
        offsets = [paginate(total, size, page).offset for page in range(1, page_count + 1)]

        assert offsets == [(page - 1) * size for page in range(1, page_count + 1)]
        assert all(a < b for a, b in zip(offsets, offsets[1:]))

        with pytest.raises(PageNotFoundError):
            paginate(total, size, page_count + 1)

    def test_rejects_negative_total(self):
        with pytest.raises(ValueError, match="total_count"):
            paginate(-1, 10, 1)

    @pytest.mark.parametrize("size", [0, -5])
    def test_rejects_non_positive_page_size(self, size):
        with pytest.raises(ValueError, match="page_size"):
            paginate(10, size, 1)


class TestParsePageNumber:
    """Test parsing of the pageNum query value."""

    @pytest.mark.parametrize("raw", [None, ""])
    def test_absent_value_means_first_page(self, raw):
        assert parse_page_number(raw) == 1

    @pytest.mark.parametrize("raw,expected", [("1", 1), ("3", 3), (" 2 ", 2), ("-1", -1)])
    def test_integers_are_parsed(self, raw, expected):
        assert parse_page_number(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "1.5", "2a", "one", "1e3"])
    def test_non_integers_are_not_found(self, raw):
        with pytest.raises(PageNotFoundError):
            parse_page_number(raw)
