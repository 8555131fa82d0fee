"""Book database table model."""

import sqlalchemy as sa
from sqlmodel import Field

from src.catalog.entities.core._base import EntityTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books.

    This represents how the Book entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together. The unique constraint on ``isbn``
    is the authoritative uniqueness guarantee.
    """

    __tablename__ = "books"
    __table_args__ = (
        sa.UniqueConstraint("isbn", name="uq_books_isbn"),
        sa.Index("ix_books_created_at", "created_at"),
        # ids are never reused, even after the newest row is deleted
        {"sqlite_autoincrement": True},
    )

    title: str = Field(max_length=255)
    author: str = Field(max_length=255)
    published_year: int
    isbn: str = Field(max_length=20)
    description: str | None = Field(default=None, sa_type=sa.Text)
