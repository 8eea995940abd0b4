"""Core services exports."""

from .book_service import BookPage, BookService, SubmitResult
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService

__all__ = [
    # Book Services
    "BookPage",
    "BookService",
    "SubmitResult",
    # Database Services
    "DbManageService",
    "DbSessionService",
]
