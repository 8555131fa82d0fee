"""JSON presentation of books.

The presented shape is the public contract of the API and does not follow
the table layout: ``description`` is omitted when null and timestamps are
rendered as UTC ISO-8601 strings with a ``Z`` suffix.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, field_serializer, model_serializer
from starlette.datastructures import URL

from src.catalog.entities.service.book import Book


def to_iso8601(value: datetime | None) -> str | None:
    """Render ``value`` in UTC. Naive datetimes are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")


class BookResource(BaseModel):
    """Presented form of a book."""

    id: int
    title: str
    author: str
    published_year: int
    isbn: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, book: Book) -> BookResource:
        return cls.model_validate(book.model_dump())

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime | None) -> str | None:
        return to_iso8601(value)

    @model_serializer(mode="wrap")
    def _omit_null_description(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if data.get("description") is None:
            data.pop("description", None)
        return data


class PaginationLinks(BaseModel):
    first: str
    last: str
    prev: str | None
    next: str | None


class PaginationMeta(BaseModel):
    current_page: int
    from_: int | None = Field(serialization_alias="from")
    last_page: int
    path: str
    per_page: int
    to: int | None
    total: int


class BookPage(BaseModel):
    """A page of presented books with navigation links and counters."""

    data: list[BookResource]
    links: PaginationLinks
    meta: PaginationMeta

    @classmethod
    def build(
        cls, books: list[Book], *, total: int, page: int, per_page: int, url: URL
    ) -> BookPage:
        last_page = max(1, math.ceil(total / per_page))
        path = str(url.replace(query=""))

        def page_url(number: int) -> str:
            return str(url.include_query_params(page=number))

        first_item = (page - 1) * per_page + 1 if books else None
        last_item = first_item + len(books) - 1 if first_item is not None else None

        return cls(
            data=[BookResource.from_entity(book) for book in books],
            links=PaginationLinks(
                first=page_url(1),
                last=page_url(last_page),
                prev=page_url(page - 1) if page > 1 else None,
                next=page_url(page + 1) if page < last_page else None,
            ),
            meta=PaginationMeta(
                current_page=page,
                from_=first_item,
                last_page=last_page,
                path=path,
                per_page=per_page,
                to=last_item,
                total=total,
            ),
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def present_book(book: Book) -> dict[str, Any]:
    """Wrap a single presented book in the ``data`` envelope."""
    return {"data": BookResource.from_entity(book).model_dump(mode="json")}
