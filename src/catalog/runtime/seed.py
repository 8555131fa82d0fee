"""Populate the catalog with fake books."""

from faker import Faker
from loguru import logger
from sqlmodel import Session

from src.catalog.entities.service.book import Book, BookCreate, SqlModelBookRepository
from src.catalog.entities.service.book.factory import fake_book_payload


def seed_books(session: Session, count: int = 20, faker: Faker | None = None) -> list[Book]:
    """Create ``count`` fake books through the repository and return them."""
    repository = SqlModelBookRepository(session)
    faker = faker or Faker()

    books = []
    for _ in range(count):
        payload = fake_book_payload(faker)
        while repository.isbn_exists(payload["isbn"]):
            payload["isbn"] = faker.unique.isbn13(separator="")
        books.append(repository.create(BookCreate.model_validate(payload)))

    logger.info("Seeded {} books", len(books))
    return books
