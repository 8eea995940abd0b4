"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates
from sqlmodel import Session

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import BookService
from src.catalog.runtime.config.config_data import ConfigData


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the collaborators built at startup."""
    return request.app.state.app_dependencies


def get_session(request: Request) -> Iterator[Session]:
    """Yield a database session scoped to the current request."""
    app_deps = get_app_dependencies(request)
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_templates(request: Request) -> Jinja2Templates:
    """Get the template renderer."""
    return get_app_dependencies(request).templates


def get_app_config(request: Request) -> ConfigData:
    """Get the configuration the application was built with."""
    return get_app_dependencies(request).config


def get_book_service(
    session: Session = Depends(get_session),
    config: ConfigData = Depends(get_app_config),
) -> BookService:
    """Get a book service bound to the request's session."""
    return BookService(session, books_per_page=config.app.books_per_page)
