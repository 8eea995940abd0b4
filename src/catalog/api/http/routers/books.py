"""Book catalog pages: list, search, create, edit and delete."""

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from src.catalog.api.http.deps import get_app_config, get_book_service, get_templates
from src.catalog.core.pagination import parse_page_number
from src.catalog.core.services import BookService
from src.catalog.entities.book import BookDraft
from src.catalog.runtime.config.config_data import ConfigData

router = APIRouter(tags=["books"])

BOOK_LIST_URL = "/books"


def _book_form(
    title: str = Form(default=""),
    author: str = Form(default=""),
    genre: str = Form(default=""),
    year: str = Form(default=""),
) -> dict[str, str]:
    return {"title": title, "author": author, "genre": genre, "year": year}


def _see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


@router.get("/", include_in_schema=False)
def home() -> RedirectResponse:
    """Send visitors to the book list."""
    return _see_other(BOOK_LIST_URL)


@router.get("/books", response_class=HTMLResponse)
def list_books(
    request: Request,
    page_num: str | None = Query(default=None, alias="pageNum"),
    service: BookService = Depends(get_book_service),
    templates: Jinja2Templates = Depends(get_templates),
    config: ConfigData = Depends(get_app_config),
) -> HTMLResponse:
    """Render one page of the catalog."""
    page = service.list_page(parse_page_number(page_num))
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "books": page.books,
            "title": config.app.title,
            "buttons": page.window.page_count,
            "page": page.window.page,
        },
    )


@router.post("/books", response_class=HTMLResponse)
def search_books(
    request: Request,
    search: str = Form(default=""),
    service: BookService = Depends(get_book_service),
    templates: Jinja2Templates = Depends(get_templates),
    config: ConfigData = Depends(get_app_config),
) -> HTMLResponse:
    """Render the books matching the search box."""
    books = service.search(search)
    return templates.TemplateResponse(
        request,
        "index.html",
        {"books": books, "title": config.app.title, "search": search},
    )


@router.get("/books/new", response_class=HTMLResponse)
def new_book_form(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
) -> HTMLResponse:
    return templates.TemplateResponse(
        request, "new-book.html", {"book": BookDraft(), "title": "New Book"}
    )


@router.post("/books/new", response_model=None)
def create_book(
    request: Request,
    values: dict[str, str] = Depends(_book_form),
    service: BookService = Depends(get_book_service),
    templates: Jinja2Templates = Depends(get_templates),
) -> HTMLResponse | RedirectResponse:
    """Create a book, or show the form again with its errors."""
    result = service.submit(values)
    if result.ok:
        return _see_other(BOOK_LIST_URL)
    return templates.TemplateResponse(
        request,
        "new-book.html",
        {"book": result.draft, "errors": result.errors, "title": "New Book"},
    )


@router.get("/books/{book_id}", response_class=HTMLResponse)
def edit_book_form(
    request: Request,
    book_id: str,
    service: BookService = Depends(get_book_service),
    templates: Jinja2Templates = Depends(get_templates),
) -> HTMLResponse:
    book = service.get(book_id)
    return templates.TemplateResponse(
        request, "update-book.html", {"book": book, "title": "Update Book"}
    )


@router.post("/books/{book_id}", response_model=None)
def update_book(
    request: Request,
    book_id: str,
    values: dict[str, str] = Depends(_book_form),
    service: BookService = Depends(get_book_service),
    templates: Jinja2Templates = Depends(get_templates),
) -> HTMLResponse | RedirectResponse:
    """Update a book, or show the form again with its errors."""
    result = service.submit(values, book_id=book_id)
    if result.ok:
        return _see_other(BOOK_LIST_URL)
    return templates.TemplateResponse(
        request,
        "update-book.html",
        {"book": result.draft, "errors": result.errors, "title": "Update Book"},
    )


@router.post("/books/{book_id}/delete")
def delete_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> RedirectResponse:
    service.delete(book_id)
    return _see_other(BOOK_LIST_URL)
