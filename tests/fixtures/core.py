from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.catalog.core.services import BookService
from src.catalog.entities.service.book import (
    Book,
    BookCreate,
    SqlModelBookRepository,
)
from src.catalog.entities.service.book.factory import fake_book_payload

__all__ = [
    "book_payload",
    "book_service",
    "client",
    "faker",
    "make_book",
    "repository",
    "session",
]


@pytest.fixture
def faker() -> Faker:
    fake = Faker()
    fake.seed_instance(1234)
    return fake


@pytest.fixture
def session() -> Generator[Session]:
    """Create a fresh database session for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from src.catalog.entities.service.book import BookTable  # noqa: F401

    SQLModel.metadata.create_all(engine)

    with Session(engine, expire_on_commit=False) as session:
        try:
            yield session
        finally:
            session.rollback()
            session.close()
            engine.dispose()


@pytest.fixture
def repository(session: Session) -> SqlModelBookRepository:
    return SqlModelBookRepository(session)


@pytest.fixture
def book_service(repository: SqlModelBookRepository) -> BookService:
    return BookService(repository)


@pytest.fixture
def book_payload(faker: Faker) -> Callable[..., dict[str, Any]]:
    """Build valid create payloads; keyword arguments override fields."""

    def _make(**overrides: Any) -> dict[str, Any]:
        return fake_book_payload(faker, **overrides)

    return _make


@pytest.fixture
def make_book(
    repository: SqlModelBookRepository,
    book_payload: Callable[..., dict[str, Any]],
) -> Callable[..., Book]:
    """Persist a book directly through the repository."""

    def _make(**overrides: Any) -> Book:
        return repository.create(BookCreate.model_validate(book_payload(**overrides)))

    return _make


@pytest.fixture
def client() -> Generator[TestClient]:
    """Yield a TestClient running the real app on a fresh in-memory database."""
    from src.catalog.api.http.app import app

    with TestClient(app) as test_client:
        yield test_client
