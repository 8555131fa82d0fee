"""Tests for the catalog-dev command line and the seeding helper."""

from typer.testing import CliRunner

from src.catalog.runtime.seed import seed_books
from src.dev.cli import app

runner = CliRunner()


def test_seed_books_creates_distinct_books(session, repository, faker):
    books = seed_books(session, count=5, faker=faker)

    assert len(books) == 5
    assert len({book.isbn for book in books}) == 5
    _, total = repository.list_page(page=1, per_page=10)
    assert total == 5


def test_seeded_books_pass_create_validation(session, faker):
    from src.catalog.entities.service.book import BookCreate

    for book in seed_books(session, count=3, faker=faker):
        BookCreate.model_validate(book.model_dump())


def test_init_db_command():
    result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0, result.output
    assert "Tables ready" in result.output


def test_init_db_with_drop():
    result = runner.invoke(app, ["init-db", "--drop"])

    assert result.exit_code == 0, result.output
    assert "Dropped existing tables" in result.output


def test_seed_command():
    result = runner.invoke(app, ["seed", "--count", "3"])

    assert result.exit_code == 0, result.output
    assert "Seeded 3 books" in result.output


def test_seed_rejects_zero_count():
    result = runner.invoke(app, ["seed", "--count", "0"])

    assert result.exit_code != 0
