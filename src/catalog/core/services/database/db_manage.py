"""Schema creation and sample data for the catalog database."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, select

SAMPLE_BOOKS = [
    {"title": "A Brief History of Time", "author": "Stephen Hawking", "genre": "Non Fiction", "year": 1988},
    {"title": "Armada", "author": "Ernest Cline", "genre": "Science Fiction", "year": 2015},
    {"title": "Emma", "author": "Jane Austen", "genre": "Classic", "year": 1815},
    {"title": "Frankenstein", "author": "Mary Shelley", "genre": "Horror", "year": 1818},
    {"title": "Harry Potter and the Philosopher's Stone", "author": "J.K. Rowling", "genre": "Fantasy", "year": 1997},
    {"title": "Harry Potter and the Chamber of Secrets", "author": "J.K. Rowling", "genre": "Fantasy", "year": 1998},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "genre": "Classic", "year": 1813},
    {"title": "Ready Player One", "author": "Ernest Cline", "genre": "Science Fiction", "year": 2011},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "Fantasy", "year": 1937},
    {"title": "The Fellowship of the Ring", "author": "J.R.R. Tolkien", "genre": "Fantasy", "year": 1954},
    {"title": "The Universe in a Nutshell", "author": "Stephen Hawking", "genre": "Non Fiction", "year": 2001},
    {"title": "The Martian", "author": "Andy Weir", "genre": "Science Fiction", "year": 2014},
]


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables."""
        from src.catalog.entities.book import BookTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def seed(self) -> int:
        """Insert the sample catalog into an empty ``books`` table.

        Returns the number of books inserted; an already populated catalog is
        left alone.
        """
        from src.catalog.entities.book import BookRepository, BookTable

        with Session(self._engine) as session:
            if session.exec(select(BookTable).limit(1)).first() is not None:
                logger.info("Catalog already has books; skipping seed")
                return 0
            repository = BookRepository(session)
            for values in SAMPLE_BOOKS:
                repository.create(values)
            session.commit()

        logger.info("Seeded {} books", len(SAMPLE_BOOKS))
        return len(SAMPLE_BOOKS)
