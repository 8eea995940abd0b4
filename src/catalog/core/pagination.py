"""Pagination of the book list.

Pages are 1-indexed. ``page_count = ceil(total / page_size)`` and a request
outside ``[1, page_count]`` is a not-found, including every request against an
empty catalog.
"""

import math
import re
from dataclasses import dataclass

from src.catalog.core.errors import PageNotFoundError

DEFAULT_PAGE = 1

_PAGE_NUMBER = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class PageWindow:
    """Slice of the catalog to fetch for one page."""

    page: int
    page_count: int
    offset: int
    limit: int


def page_count_for(total_count: int, page_size: int) -> int:
    if total_count < 0:
        raise ValueError(f"total_count must be >= 0, got {total_count}")
    if page_size <= 0:
        raise ValueError(f"page_size must be > 0, got {page_size}")
    return math.ceil(total_count / page_size)


def paginate(total_count: int, page_size: int, requested_page: int = DEFAULT_PAGE) -> PageWindow:
    """Compute the offset and limit for ``requested_page``.

    Raises:
        PageNotFoundError: If the page lies outside ``[1, page_count]``.
        ValueError: If ``total_count`` is negative or ``page_size`` is not positive.
    """
    page_count = page_count_for(total_count, page_size)
    if not 1 <= requested_page <= page_count:
        raise PageNotFoundError(requested_page, page_count)

    return PageWindow(
        page=requested_page,
        page_count=page_count,
        offset=(requested_page - 1) * page_size,
        limit=page_size,
    )


def parse_page_number(raw: str | None) -> int:
    """Turn the ``pageNum`` query value into a page number.

    An absent or empty value means the first page. Anything that is not a
    base-10 integer cannot name a page.
    """
    if raw is None or raw == "":
        return DEFAULT_PAGE
    text = raw.strip()
    if not _PAGE_NUMBER.match(text):
        raise PageNotFoundError(raw)
    return int(text)
