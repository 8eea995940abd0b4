"""Book database table model."""

from sqlmodel import Field

from src.catalog.entities._base import EntityTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books.

    This represents how the Book entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "books"

    title: str = Field(index=True)
    author: str = Field(index=True)
    genre: str | None = None
    year: int | None = None
