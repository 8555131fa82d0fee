"""Unit tests for the book payload models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from src.catalog.entities.service.book import BookCreate, BookUpdate
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import with_context

VALID = {
    "title": "Clean Code",
    "author": "Robert C. Martin",
    "published_year": 2008,
    "isbn": "9780132350884",
}


def _error_fields(exc: ValidationError) -> set[str]:
    return {str(error["loc"][0]) for error in exc.errors()}


class TestBookCreate:
    def test_accepts_valid_payload(self):
        book = BookCreate.model_validate(VALID)

        assert book.title == "Clean Code"
        assert book.description is None

    def test_strips_whitespace(self):
        book = BookCreate.model_validate({**VALID, "title": "  Clean Code  "})

        assert book.title == "Clean Code"

    def test_blank_strings_are_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            BookCreate.model_validate({**VALID, "author": "   "})

        assert _error_fields(exc_info.value) == {"author"}

    def test_missing_fields_are_all_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            BookCreate.model_validate({"description": "only this"})

        assert _error_fields(exc_info.value) == {
            "title",
            "author",
            "published_year",
            "isbn",
        }

    @pytest.mark.parametrize("field,limit", [("title", 255), ("author", 255), ("isbn", 20)])
    def test_length_limits(self, field, limit):
        BookCreate.model_validate({**VALID, field: "x" * limit})

        with pytest.raises(ValidationError):
            BookCreate.model_validate({**VALID, field: "x" * (limit + 1)})

    def test_published_year_bounds(self):
        this_year = datetime.now(UTC).year

        BookCreate.model_validate({**VALID, "published_year": 1500})
        BookCreate.model_validate({**VALID, "published_year": this_year})

        for year in (1400, 1499, this_year + 1):
            with pytest.raises(ValidationError):
                BookCreate.model_validate({**VALID, "published_year": year})

    def test_published_year_minimum_follows_config(self):
        override = ConfigData()
        override.catalog.min_published_year = 1400

        with with_context(override):
            book = BookCreate.model_validate({**VALID, "published_year": 1450})

        assert book.published_year == 1450

    def test_unknown_fields_are_ignored(self):
        book = BookCreate.model_validate({**VALID, "id": 99, "created_at": "yesterday"})

        assert "id" not in book.model_dump()


class TestBookUpdate:
    def test_only_supplied_fields_are_changes(self):
        update = BookUpdate.model_validate({"title": "New"})

        assert update.changes() == {"title": "New"}

    def test_empty_payload_has_no_changes(self):
        assert BookUpdate.model_validate({}).changes() == {}

    def test_explicit_null_description_is_a_change(self):
        update = BookUpdate.model_validate({"description": None})

        assert update.changes() == {"description": None}

    @pytest.mark.parametrize("field", ["title", "author", "published_year", "isbn"])
    def test_required_fields_may_not_be_null(self, field):
        with pytest.raises(ValidationError) as exc_info:
            BookUpdate.model_validate({field: None})

        assert _error_fields(exc_info.value) == {field}

    def test_supplied_fields_are_validated(self):
        with pytest.raises(ValidationError) as exc_info:
            BookUpdate.model_validate({"published_year": 1400, "isbn": ""})

        assert _error_fields(exc_info.value) == {"published_year", "isbn"}


class TestBlankDescription:
    def test_create_maps_blank_description_to_none(self):
        book = BookCreate.model_validate({**VALID, "description": "   "})

        assert book.description is None

    def test_update_maps_blank_description_to_none(self):
        update = BookUpdate.model_validate({"description": ""})

        assert update.changes() == {"description": None}

    def test_text_description_is_kept(self):
        book = BookCreate.model_validate({**VALID, "description": " Good read "})

        assert book.description == "Good read"
