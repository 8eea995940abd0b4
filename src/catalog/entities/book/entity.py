"""Entity: Book."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from src.catalog.entities._base import Entity

BOOK_FIELDS = ("title", "author", "genre", "year")

# Four-digit years either side of year zero; also keeps values inside SQLite INTEGER
YEAR_MIN = -9999
YEAR_MAX = 9999


class Book(Entity):
    """Book entity representing a catalog record.

    This is the request-scoped copy handed out by the repository. It inherits
    from Entity to get auto-generated UUID identifiers.
    """

    title: str = Field(description="Title")
    author: str = Field(description="Author")
    genre: str | None = Field(default=None, description="Genre")
    year: int | None = Field(default=None, description="Year of publication")

    def __eq__(self, other: Any) -> bool:
        """Compare books by business attributes, ignoring timestamps."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.genre == other.genre
            and self.year == other.year
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.title,
            self.author,
            self.genre,
            self.year,
        ))


class BookInput(BaseModel):
    """Schema a submitted book must satisfy before it is stored.

    Form values arrive as text: blank optional fields become ``None`` and
    ``year`` is parsed as a whole number.
    """

    title: str
    author: str
    genre: str | None = None
    year: int | None = None

    @field_validator("title", "author", mode="before")
    @classmethod
    def _not_blank(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or not str(value).strip():
            label = info.field_name.capitalize()
            raise PydanticCustomError("required", f'"{label}" is required')
        return value

    @field_validator("genre", mode="before")
    @classmethod
    def _blank_genre(cls, value: Any) -> Any:
        if value is None or not str(value).strip():
            return None
        return value

    @field_validator("year", mode="before")
    @classmethod
    def _parse_year(cls, value: Any) -> int | None:
        if value is None:
            return None
        if isinstance(value, int) and not isinstance(value, bool):
            year = value
        else:
            text = str(value).strip()
            if not text:
                return None
            try:
                year = int(text)
            except ValueError:
                raise PydanticCustomError(
                    "whole_number", '"Year" must be a whole number'
                ) from None
        if not YEAR_MIN <= year <= YEAR_MAX:
            raise PydanticCustomError(
                "year_range", f'"Year" must be between {YEAR_MIN} and {YEAR_MAX}'
            )
        return year


@dataclass
class BookDraft:
    """Unsaved echo of submitted form values.

    Used only to redisplay a form after a failed submission. ``id`` is set
    when the draft belongs to an existing record being edited.
    """

    title: str = ""
    author: str = ""
    genre: str = ""
    year: str = ""
    id: str | None = None

    @classmethod
    def from_values(cls, values: dict[str, Any], book_id: str | None = None) -> "BookDraft":
        """Build a draft from submitted values, keeping them as entered."""
        fields = {
            name: "" if values.get(name) is None else str(values[name])
            for name in BOOK_FIELDS
        }
        return cls(id=book_id, **fields)
