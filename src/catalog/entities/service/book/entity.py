"""Book domain model."""

from typing import Any

from pydantic import Field

from src.catalog.entities.core._base import Entity


class Book(Entity):
    """Book entity representing a catalog entry.

    This is the domain model handed between the repository, the service and
    the HTTP layer. It is always built from a persisted ``BookTable`` row.
    """

    title: str = Field(description="Title")
    author: str = Field(description="Author")
    published_year: int = Field(description="Year of publication")
    isbn: str = Field(description="ISBN, unique across the catalog")
    description: str | None = Field(default=None, description="Free-form description")

    def __eq__(self, other: Any) -> bool:
        """Books are equal when every stored field except the timestamps matches."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.published_year == other.published_year
            and self.isbn == other.isbn
            and self.description == other.description
        )

    def __hash__(self) -> int:
        return hash((self.id, self.isbn))
