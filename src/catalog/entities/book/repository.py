"""Data-access layer for books."""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import Session, col, select

from src.catalog.core.errors import BookValidationError, FieldError
from src.catalog.entities.book.entity import Book, BookDraft, BookInput
from src.catalog.entities.book.table import BookTable


def _field_errors(exc: ValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        if error["type"] == "missing":
            message = f'"{field.capitalize()}" is required'
        else:
            message = error["msg"]
        errors.append(FieldError(field=field, message=message))
    return errors


class BookRepository:
    """Data-access layer for books.

    Writes are flushed but not committed; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def validate(values: Mapping[str, Any]) -> BookInput:
        """Check submitted values against the book schema.

        Raises:
            BookValidationError: With one ``FieldError`` per offending field.
        """
        try:
            return BookInput.model_validate(dict(values))
        except ValidationError as exc:
            raise BookValidationError(_field_errors(exc)) from exc

    def count(self, where: ColumnElement[bool] | None = None) -> int:
        statement = select(func.count()).select_from(BookTable)
        if where is not None:
            statement = statement.where(where)
        return self._session.exec(statement).one()

    def find_all(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        where: ColumnElement[bool] | None = None,
    ) -> list[Book]:
        statement = select(BookTable).order_by(
            col(BookTable.created_at), col(BookTable.id)
        )
        if where is not None:
            statement = statement.where(where)
        if offset is not None:
            statement = statement.offset(offset)
        if limit is not None:
            statement = statement.limit(limit)
        rows = self._session.exec(statement).all()
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def get(self, book_id: str) -> Book | None:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return None
        return Book.model_validate(row, from_attributes=True)

    def create(self, values: Mapping[str, Any]) -> Book:
        """Validate and insert a new book."""
        data = self.validate(values)
        row = BookTable(**data.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row, from_attributes=True)

    def build(self, values: Mapping[str, Any], book_id: str | None = None) -> BookDraft:
        """Return an unsaved draft of ``values``; nothing touches the session."""
        return BookDraft.from_values(dict(values), book_id=book_id)

    def update(self, book_id: str, values: Mapping[str, Any]) -> Book | None:
        """Validate ``values`` and apply them to an existing book.

        Returns ``None`` when no book has ``book_id``. Validation runs only
        after the book is found, so a missing id is reported first.
        """
        row = self._session.get(BookTable, book_id)
        if row is None:
            return None

        data = self.validate(values)
        for field, value in data.model_dump().items():
            setattr(row, field, value)
        row.updated_at = datetime.now(UTC)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row, from_attributes=True)

    def delete(self, book_id: str) -> bool:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
