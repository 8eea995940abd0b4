"""Entity package: Book."""

from .entity import Book, BookDraft, BookInput
from .repository import BookRepository
from .table import BookTable

__all__ = ["Book", "BookDraft", "BookInput", "BookRepository", "BookTable"]
