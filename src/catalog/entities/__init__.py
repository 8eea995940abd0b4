"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model and input validation
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .book import Book, BookDraft, BookInput, BookRepository, BookTable

__all__ = [
    "Book",
    "BookDraft",
    "BookInput",
    "BookRepository",
    "BookTable",
]
