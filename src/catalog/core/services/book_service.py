"""Book catalog operations used by the HTTP handlers."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from loguru import logger
from sqlmodel import Session

from src.catalog.core.errors import BookNotFoundError, BookValidationError, FieldError
from src.catalog.core.pagination import PageWindow, paginate
from src.catalog.core.search import build_search_filter
from src.catalog.entities.book import Book, BookDraft, BookRepository


@dataclass
class BookPage:
    books: list[Book]
    window: PageWindow


@dataclass
class SubmitResult:
    """Outcome of a create or update.

    Exactly one of ``book`` (saved) or ``draft`` (rejected input, with
    ``errors``) is set.
    """

    book: Book | None = None
    draft: BookDraft | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.book is not None


class BookService:
    """Orchestrates the book repository within one request's session."""

    def __init__(self, session: Session, books_per_page: int = 10) -> None:
        self._session = session
        self._repository = BookRepository(session)
        self._books_per_page = books_per_page

    @property
    def repository(self) -> BookRepository:
        return self._repository

    def list_page(self, page: int) -> BookPage:
        """Fetch one page of the catalog.

        Raises:
            PageNotFoundError: If ``page`` is outside the catalog's page range.
        """
        window = paginate(self._repository.count(), self._books_per_page, page)
        books = self._repository.find_all(limit=window.limit, offset=window.offset)
        return BookPage(books=books, window=window)

    def search(self, term: str | None) -> list[Book]:
        logger.debug("Searching books for {!r}", term)
        return self._repository.find_all(where=build_search_filter(term))

    def get(self, book_id: str) -> Book:
        book = self._repository.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def submit(self, values: Mapping[str, Any], book_id: str | None = None) -> SubmitResult:
        """Create a book, or update ``book_id`` when given.

        Validation failures are returned as a draft of the submitted values
        and are never persisted. Other errors propagate.

        Raises:
            BookNotFoundError: If ``book_id`` is given but no such book exists.
        """
        try:
            if book_id is None:
                book = self._repository.create(values)
            else:
                book = self._repository.update(book_id, values)
                if book is None:
                    raise BookNotFoundError(book_id)
        except BookValidationError as exc:
            self._session.rollback()
            logger.bind(book_id=book_id, fields=[e.field for e in exc.errors]).info(
                "book.validation_failed"
            )
            return SubmitResult(
                draft=self._repository.build(values, book_id=book_id),
                errors=exc.errors,
            )

        self._session.commit()
        logger.bind(book_id=book.id).info(
            "book.created" if book_id is None else "book.updated"
        )
        return SubmitResult(book=book)

    def delete(self, book_id: str) -> None:
        """Remove a book.

        Raises:
            BookNotFoundError: If no book has ``book_id``.
        """
        if not self._repository.delete(book_id):
            raise BookNotFoundError(book_id)
        self._session.commit()
        logger.bind(book_id=book_id).info("book.deleted")
