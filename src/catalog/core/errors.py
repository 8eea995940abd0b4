"""Error taxonomy for catalog operations.

``BookValidationError`` is recoverable: the submitted form is shown again with
its messages. ``NotFoundError`` covers a missing book or an out-of-range list
page. Anything else is an unclassified failure and goes to the generic error
handler.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A validation message attached to a single form field."""

    field: str
    message: str


class CatalogError(Exception):
    """Base class for catalog errors."""


class BookValidationError(CatalogError):
    """Submitted book values violate the schema."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        super().__init__("; ".join(error.message for error in self.errors))


class NotFoundError(CatalogError):
    """The requested resource or page does not exist."""


class BookNotFoundError(NotFoundError):
    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__(f"Book {book_id} not found")


class PageNotFoundError(NotFoundError):
    def __init__(self, page: object, page_count: int | None = None):
        self.page = page
        self.page_count = page_count
        if page_count is None:
            super().__init__(f"Page {page!r} not found")
        else:
            super().__init__(f"Page {page!r} not found (page count {page_count})")
