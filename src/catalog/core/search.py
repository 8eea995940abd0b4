"""Search predicate over the book columns."""

from sqlalchemy import String, cast, or_
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import col

from src.catalog.entities.book import BookTable


def build_search_filter(term: str | None) -> ColumnElement[bool]:
    """Match books whose title, author, genre or year contains ``term``.

    The term is bound as a parameter but not escaped, so ``%`` and ``_`` keep
    their LIKE meaning. Case sensitivity follows the column collation. An empty
    term matches every book.
    """
    pattern = f"%{term or ''}%"
    return or_(
        col(BookTable.title).like(pattern),
        col(BookTable.author).like(pattern),
        col(BookTable.genre).like(pattern),
        cast(col(BookTable.year), String).like(pattern),
    )
