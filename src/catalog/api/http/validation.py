"""Create and update validation profiles for book payloads.

Both profiles collect every field-level violation before raising, so a
client sees all of its mistakes in one 422 response. The isbn uniqueness
check here is advisory; the unique constraint on the table is what holds
under concurrent writes.
"""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import ErrorDetails

from src.catalog.core.exceptions import BookValidationError
from src.catalog.entities.service.book import BookCreate, BookRepository, BookUpdate

_PHRASES = {
    "missing": "is required",
    "string_too_short": "is required",
    "string_type": "must be a string",
    "int_type": "must be an integer",
    "int_parsing": "must be an integer",
    "int_from_float": "must be an integer",
}

ISBN_TAKEN = "The isbn has already been taken."

TPayload = TypeVar("TPayload", bound=BaseModel)


def _label(field: str) -> str:
    return field.replace("_", " ")


def _message(error: ErrorDetails) -> str:
    field = str(error["loc"][0]) if error["loc"] else "body"
    error_type = error["type"]

    if error_type == "string_too_long":
        limit = error.get("ctx", {}).get("max_length")
        phrase = f"must not be greater than {limit} characters"
    elif error_type.endswith("_type") and error.get("input") is None:
        # JSON null for a required field reads as if the field were absent
        phrase = _PHRASES["missing"]
    elif error_type == "value_error":
        phrase = str(error.get("ctx", {}).get("error", error["msg"]))
    else:
        phrase = _PHRASES.get(error_type, error["msg"].lower())

    return f"The {_label(field)} field {phrase}."


def field_errors(errors: list[ErrorDetails]) -> dict[str, list[str]]:
    """Group pydantic error details by their top-level field name."""
    grouped: dict[str, list[str]] = {}
    for error in errors:
        field = str(error["loc"][0]) if error["loc"] else "body"
        grouped.setdefault(field, []).append(_message(error))
    return grouped


def _parse(
    model: type[TPayload], payload: dict[str, Any]
) -> tuple[TPayload | None, dict[str, list[str]]]:
    try:
        return model.model_validate(payload), {}
    except PydanticValidationError as e:
        return None, field_errors(e.errors())


def _candidate_isbn(payload: dict[str, Any], errors: dict[str, list[str]]) -> str | None:
    isbn = payload.get("isbn")
    if "isbn" in errors or not isinstance(isbn, str):
        return None
    return isbn.strip()


def validate_create(payload: dict[str, Any], repository: BookRepository) -> BookCreate:
    """Apply the create profile.

    Raises:
        BookValidationError: With every violation found, duplicate isbn included.
    """
    data, errors = _parse(BookCreate, payload)

    isbn = _candidate_isbn(payload, errors)
    if isbn and repository.isbn_exists(isbn):
        errors.setdefault("isbn", []).append(ISBN_TAKEN)

    if errors or data is None:
        raise BookValidationError(errors)
    return data


def validate_update(
    payload: dict[str, Any], repository: BookRepository, book_id: int
) -> BookUpdate:
    """Apply the update profile for the book identified by ``book_id``.

    Only fields present in ``payload`` are checked. The book's own isbn does
    not count as a duplicate.

    Raises:
        BookValidationError: With every violation found.
    """
    data, errors = _parse(BookUpdate, payload)

    isbn = _candidate_isbn(payload, errors)
    if isbn and repository.isbn_exists(isbn, exclude_id=book_id):
        errors.setdefault("isbn", []).append(ISBN_TAKEN)

    if errors or data is None:
        raise BookValidationError(errors)
    return data
