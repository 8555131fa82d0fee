"""Errors raised by the book catalog and mapped to HTTP responses by the app."""


class CatalogError(Exception):
    """Base class for catalog errors."""


class BookValidationError(CatalogError):
    """One or more fields of a book payload violate their constraints.

    ``errors`` maps each offending field name to its list of messages.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        super().__init__(self.summary)

    @property
    def summary(self) -> str:
        messages = [msg for field_msgs in self.errors.values() for msg in field_msgs]
        if not messages:
            return "The given data was invalid."
        extra = len(messages) - 1
        if extra == 0:
            return messages[0]
        plural = "error" if extra == 1 else "errors"
        return f"{messages[0]} (and {extra} more {plural})"


class BookNotFoundError(CatalogError):
    """No book exists with the requested identifier."""

    def __init__(self, book_id: int | str) -> None:
        self.book_id = book_id
        super().__init__(f"Book {book_id} not found")


class PersistenceError(CatalogError):
    """The database rejected an operation."""
