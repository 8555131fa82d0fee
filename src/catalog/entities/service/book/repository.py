"""Book repository: the persistence seam for the catalog."""

from abc import ABC, abstractmethod
from typing import NoReturn

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from src.catalog.core.exceptions import PersistenceError

from .entity import Book
from .schemas import BookCreate, BookUpdate
from .table import BookTable


class BookRepository(ABC):
    """Persistence operations for books."""

    @abstractmethod
    def create(self, data: BookCreate) -> Book:
        """Persist a new book and return it with its assigned id and timestamps."""
        raise NotImplementedError

    @abstractmethod
    def update(self, existing: Book, data: BookUpdate) -> Book:
        """Apply the supplied fields of ``data`` and return the stored state."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, existing: Book) -> None:
        """Permanently remove the book."""
        raise NotImplementedError

    @abstractmethod
    def get(self, book_id: int) -> Book | None:
        """Return the book with ``book_id`` or None."""
        raise NotImplementedError

    @abstractmethod
    def list_page(self, page: int, per_page: int) -> tuple[list[Book], int]:
        """Return one page of books, newest first, and the total count."""
        raise NotImplementedError

    @abstractmethod
    def isbn_exists(self, isbn: str, exclude_id: int | None = None) -> bool:
        """Whether another book already uses ``isbn``."""
        raise NotImplementedError


class SqlModelBookRepository(BookRepository):
    """Data-access layer for books backed by a SQLModel session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, data: BookCreate) -> Book:
        row = BookTable(**data.model_dump())
        self._write(row, "create")
        logger.info("Created book {} (isbn={})", row.id, row.isbn)
        return Book.model_validate(row)

    def update(self, existing: Book, data: BookUpdate) -> Book:
        row = self._session.get(BookTable, existing.id)
        if row is None:
            raise PersistenceError(f"Book {existing.id} no longer exists")

        changes = data.changes()
        for field, value in changes.items():
            setattr(row, field, value)

        self._write(row, "update")
        logger.info("Updated book {} fields={}", row.id, sorted(changes))
        return Book.model_validate(row)

    def delete(self, existing: Book) -> None:
        row = self._session.get(BookTable, existing.id)
        if row is None:
            raise PersistenceError(f"Book {existing.id} no longer exists")

        try:
            self._session.delete(row)
            self._session.commit()
        except SQLAlchemyError as e:
            self._fail("delete", e)
        logger.info("Deleted book {}", existing.id)

    def get(self, book_id: int) -> Book | None:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return None
        return Book.model_validate(row)

    def list_page(self, page: int, per_page: int) -> tuple[list[Book], int]:
        total = self._session.exec(select(func.count(BookTable.id))).one()
        offset = (page - 1) * per_page
        # Also keeps oversized page numbers away from the 64-bit OFFSET
        if offset >= total:
            return [], total

        statement = (
            select(BookTable)
            .order_by(col(BookTable.created_at).desc(), col(BookTable.id).desc())
            .offset(offset)
            .limit(per_page)
        )
        rows = self._session.exec(statement).all()
        return [Book.model_validate(row) for row in rows], total

    def isbn_exists(self, isbn: str, exclude_id: int | None = None) -> bool:
        statement = select(BookTable.id).where(BookTable.isbn == isbn)
        if exclude_id is not None:
            statement = statement.where(BookTable.id != exclude_id)
        return self._session.exec(statement).first() is not None

    def _write(self, row: BookTable, operation: str) -> None:
        """Commit ``row`` and reload it so it mirrors what the database stored."""
        try:
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        except SQLAlchemyError as e:
            self._fail(operation, e)

    def _fail(self, operation: str, error: SQLAlchemyError) -> NoReturn:
        self._session.rollback()
        logger.bind(error_type=type(error).__name__).error(
            "Book {} failed: {}", operation, error
        )
        raise PersistenceError(f"Could not {operation} book") from error
