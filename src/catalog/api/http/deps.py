"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.exceptions import BookNotFoundError
from src.catalog.core.services import BookService, DbSessionService
from src.catalog.entities.service.book import (
    Book,
    BookRepository,
    SqlModelBookRepository,
)

# Ids are stored as signed 64-bit integers
_MAX_ID = 2**63 - 1
_MIN_ID = -(2**63)


def get_database_service(request: Request) -> DbSessionService:
    """Get the shared database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a request-scoped database session and close it afterwards."""
    with database_service.get_session() as session:
        yield session


def get_book_repository(db: Session = Depends(get_db_session)) -> BookRepository:
    """Bind the repository interface to its SQLModel implementation."""
    return SqlModelBookRepository(db)


def get_book_service(
    repository: BookRepository = Depends(get_book_repository),
) -> BookService:
    """Get the Book service instance."""
    return BookService(repository)


def get_book_or_404(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> Book:
    """Resolve the ``book_id`` path segment to an existing book.

    Identifiers that are not integers can never match a row, so they are
    reported as missing rather than as validation errors.
    """
    try:
        numeric_id = int(book_id)
    except ValueError:
        raise BookNotFoundError(book_id) from None

    if not _MIN_ID <= numeric_id <= _MAX_ID:
        raise BookNotFoundError(numeric_id)

    book = service.get_book(numeric_id)
    if book is None:
        raise BookNotFoundError(numeric_id)
    return book
