"""HTTP tests for the book catalog pages."""

import pytest
from fastapi.testclient import TestClient

from src.catalog.core.services import BookService

BOOK_LINK = '<td><a href="/books/'
NOT_FOUND_TEXT = "couldn't find the page"
ERROR_TEXT = "There was an unexpected error on the server."


def _book_rows(html: str) -> int:
    return html.count(BOOK_LINK)


class TestHome:
    def test_redirects_to_book_list(self, client: TestClient):
        response = client.get("/", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/books"


class TestListBooks:
    def test_first_page_by_default(self, client: TestClient, add_numbered_books):
        add_numbered_books(25)

        response = client.get("/books")

        assert response.status_code == 200
        assert _book_rows(response.text) == 10
        assert 'href="/books?pageNum=3"' in response.text
        assert 'href="/books?pageNum=4"' not in response.text

    def test_last_page(self, client: TestClient, add_numbered_books):
        add_numbered_books(25)

        response = client.get("/books", params={"pageNum": 3})

        assert response.status_code == 200
        assert _book_rows(response.text) == 5

    def test_empty_page_number_shows_first_page(self, client: TestClient, add_numbered_books):
        add_numbered_books(25)

        response = client.get("/books?pageNum=")

        assert response.status_code == 200
        assert _book_rows(response.text) == 10

    @pytest.mark.parametrize("page_num", ["4", "0", "-1", "abc", "1.5"])
    def test_out_of_range_page_renders_not_found(self, client: TestClient, add_numbered_books, page_num):
        add_numbered_books(25)

        response = client.get("/books", params={"pageNum": page_num})

        assert response.status_code == 404
        assert NOT_FOUND_TEXT in response.text

    def test_empty_catalog_renders_not_found(self, client: TestClient):
        response = client.get("/books")

        assert response.status_code == 404
        assert NOT_FOUND_TEXT in response.text

    def test_page_size_follows_config(self, client_factory, add_numbered_books):
        add_numbered_books(7)
        client = client_factory(books_per_page=3)

        response = client.get("/books", params={"pageNum": 3})

        assert response.status_code == 200
        assert _book_rows(response.text) == 1


class TestSearchBooks:
    def test_filters_by_search_term(self, client: TestClient, add_books):
        add_books(
            {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "Fantasy", "year": 1937},
            {"title": "Emma", "author": "Jane Austen", "genre": "Classic", "year": 1815},
        )

        response = client.post("/books", data={"search": "Tolkien"})

        assert response.status_code == 200
        assert "The Hobbit" in response.text
        assert "Emma" not in response.text
        assert 'value="Tolkien"' in response.text

    def test_searches_year(self, client: TestClient, add_books):
        add_books(
            {"title": "The Hobbit", "author": "J.R.R. Tolkien", "year": 1937},
            {"title": "Emma", "author": "Jane Austen", "year": 1815},
        )

        response = client.post("/books", data={"search": "1815"})

        assert _book_rows(response.text) == 1
        assert "Emma" in response.text

    def test_missing_search_field_lists_everything(self, client: TestClient, add_numbered_books):
        add_numbered_books(12)

        response = client.post("/books")

        assert response.status_code == 200
        assert _book_rows(response.text) == 12

    def test_no_match_renders_empty_list(self, client: TestClient, add_numbered_books):
        add_numbered_books(2)

        response = client.post("/books", data={"search": "nothing like this"})

        assert response.status_code == 200
        assert _book_rows(response.text) == 0
        assert "No books found." in response.text


class TestCreateBook:
    def test_new_book_form(self, client: TestClient):
        response = client.get("/books/new")

        assert response.status_code == 200
        assert 'action="/books/new"' in response.text
        assert 'name="title"' in response.text

    def test_create_redirects_to_list(self, client: TestClient, stored_books):
        response = client.post(
            "/books/new",
            data={"title": "Emma", "author": "Jane Austen", "genre": "Classic", "year": "1815"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/books"
        (row,) = stored_books()
        assert (row.title, row.author, row.genre, row.year) == ("Emma", "Jane Austen", "Classic", 1815)

    def test_invalid_book_redisplays_form_with_errors(self, client: TestClient, stored_books):
        response = client.post(
            "/books/new",
            data={"title": "", "author": "Jane Austen", "genre": "Classic", "year": "soon"},
        )

        assert response.status_code == 200
        assert "&#34;Title&#34; is required" in response.text
        assert "&#34;Year&#34; must be a whole number" in response.text
        assert 'value="Jane Austen"' in response.text
        assert 'value="soon"' in response.text
        assert stored_books() == []

    def test_oversized_year_redisplays_form(self, client: TestClient, stored_books):
        response = client.post(
            "/books/new",
            data={"title": "Emma", "author": "Jane Austen", "year": "99999999999999999999"},
        )

        assert response.status_code == 200
        assert "&#34;Year&#34; must be between -9999 and 9999" in response.text
        assert 'value="99999999999999999999"' in response.text
        assert stored_books() == []


class TestEditBook:
    def test_edit_form_shows_book(self, client: TestClient, add_books):
        (row,) = add_books({"title": "Emma", "author": "Jane Austen", "year": 1815})

        response = client.get(f"/books/{row.id}")

        assert response.status_code == 200
        assert 'value="Emma"' in response.text
        assert f'action="/books/{row.id}/delete"' in response.text

    def test_edit_form_for_missing_book_is_not_found(self, client: TestClient):
        response = client.get("/books/missing")

        assert response.status_code == 404
        assert NOT_FOUND_TEXT in response.text

    def test_update_redirects_to_list(self, client: TestClient, add_books, stored_books):
        (row,) = add_books({"title": "Emma", "author": "Jane Austen"})

        response = client.post(
            f"/books/{row.id}",
            data={"title": "Persuasion", "author": "Jane Austen", "genre": "", "year": "1817"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        (stored,) = stored_books()
        assert stored.title == "Persuasion"
        assert stored.year == 1817

    def test_invalid_update_redisplays_form_for_same_book(
        self, client: TestClient, add_books, stored_books
    ):
        (row,) = add_books({"title": "Emma", "author": "Jane Austen"})

        response = client.post(
            f"/books/{row.id}", data={"title": "Persuasion", "author": ""}
        )

        assert response.status_code == 200
        assert "&#34;Author&#34; is required" in response.text
        assert 'value="Persuasion"' in response.text
        assert f'action="/books/{row.id}"' in response.text
        (stored,) = stored_books()
        assert stored.title == "Emma"

    def test_oversized_year_on_update_redisplays_form(
        self, client: TestClient, add_books, stored_books
    ):
        (row,) = add_books({"title": "Emma", "author": "Jane Austen", "year": 1815})

        response = client.post(
            f"/books/{row.id}",
            data={"title": "Emma", "author": "Jane Austen", "year": "1" + "0" * 30},
        )

        assert response.status_code == 200
        assert "&#34;Year&#34; must be between -9999 and 9999" in response.text
        assert f'action="/books/{row.id}"' in response.text
        (stored,) = stored_books()
        assert stored.year == 1815

    def test_update_missing_book_is_not_found(self, client: TestClient):
        response = client.post("/books/missing", data={"title": "Emma", "author": "Jane Austen"})

        assert response.status_code == 404
        assert NOT_FOUND_TEXT in response.text


class TestDeleteBook:
    def test_delete_redirects_to_list(self, client: TestClient, add_books, stored_books):
        (row,) = add_books({"title": "Emma", "author": "Jane Austen"})

        response = client.post(f"/books/{row.id}/delete", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/books"
        assert stored_books() == []

    def test_delete_missing_book_is_not_found(self, client: TestClient):
        response = client.post("/books/missing/delete")

        assert response.status_code == 404
        assert NOT_FOUND_TEXT in response.text


class TestNotFoundPolicy:
    """Missing books and pages go through one handler configured by policy."""

    @pytest.fixture
    def escalating_client(self, client_factory) -> TestClient:
        return client_factory(not_found_policy="escalate")

    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/books/missing"),
            ("post", "/books/missing"),
            ("post", "/books/missing/delete"),
            ("get", "/books?pageNum=9"),
        ],
    )
    def test_escalate_uses_error_view(self, escalating_client: TestClient, method, path):
        response = escalating_client.request(method.upper(), path)

        assert response.status_code == 404
        assert ERROR_TEXT in response.text
        assert NOT_FOUND_TEXT not in response.text

    def test_render_uses_not_found_view(self, client: TestClient):
        response = client.get("/books/missing")

        assert response.status_code == 404
        assert NOT_FOUND_TEXT in response.text
        assert ERROR_TEXT not in response.text


class TestErrors:
    def test_unknown_route_renders_not_found(self, client: TestClient):
        response = client.get("/no/such/page")

        assert response.status_code == 404
        assert NOT_FOUND_TEXT in response.text

    def test_unclassified_failure_renders_error_page(self, client: TestClient, monkeypatch):
        def boom(self, term):
            raise RuntimeError("database on fire")

        monkeypatch.setattr(BookService, "search", boom)

        response = client.post("/books", data={"search": "x"})

        assert response.status_code == 500
        assert ERROR_TEXT in response.text

    def test_request_id_is_echoed(self, client: TestClient):
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_is_generated(self, client: TestClient):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]
