"""Request payload models for books.

``BookCreate`` and ``BookUpdate`` are the only way request data reaches the
repository, so only the fields named here can ever be written.
"""

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator

from src.catalog.runtime.context import get_config

Title = Annotated[str, StringConstraints(min_length=1, max_length=255)]
Author = Annotated[str, StringConstraints(min_length=1, max_length=255)]
Isbn = Annotated[str, StringConstraints(min_length=1, max_length=20)]


def check_published_year(value: int) -> int:
    """Ensure ``value`` lies between the configured minimum and the current year."""
    lower = get_config().catalog.min_published_year
    upper = datetime.now(UTC).year
    if not lower <= value <= upper:
        raise ValueError(f"must be between {lower} and {upper}")
    return value


class _BookPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @field_validator("description", mode="after", check_fields=False)
    @classmethod
    def _blank_description_is_null(cls, value: str | None) -> str | None:
        return value or None


class BookCreate(_BookPayload):
    """Fields accepted when creating a book."""

    title: Title
    author: Author
    published_year: int
    isbn: Isbn
    description: str | None = None

    @field_validator("published_year")
    @classmethod
    def _published_year_in_range(cls, value: int) -> int:
        return check_published_year(value)


class BookUpdate(_BookPayload):
    """Fields accepted when updating a book.

    Every field is optional. Only fields present in the request body end up
    in ``model_fields_set``; absent fields are neither validated nor written.
    """

    title: Title | None = None
    author: Author | None = None
    published_year: int | None = None
    isbn: Isbn | None = None
    description: str | None = None

    @field_validator("title", "author", "published_year", "isbn", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may not be null")
        return value

    @field_validator("published_year")
    @classmethod
    def _published_year_in_range(cls, value: int | None) -> int | None:
        return check_published_year(value) if value is not None else value

    def changes(self) -> dict[str, Any]:
        """Return only the supplied fields and their values."""
        return self.model_dump(include=self.model_fields_set)
