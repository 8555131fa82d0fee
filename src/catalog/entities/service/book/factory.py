"""Fake book payloads for seeding and tests."""

from datetime import UTC, datetime
from typing import Any

from faker import Faker

_faker = Faker()


def fake_book_payload(faker: Faker | None = None, **overrides: Any) -> dict[str, Any]:
    """Build a valid create payload; ``overrides`` replace individual fields."""
    fake = faker or _faker
    payload: dict[str, Any] = {
        "title": fake.sentence(nb_words=3).rstrip("."),
        "author": fake.name(),
        "published_year": fake.random_int(min=1980, max=datetime.now(UTC).year),
        "isbn": fake.unique.isbn13(separator=""),
        "description": fake.paragraph() if fake.boolean() else None,
    }
    payload.update(overrides)
    return payload
