"""Book service: the business seam between HTTP handlers and the repository."""

from src.catalog.entities.service.book import (
    Book,
    BookCreate,
    BookRepository,
    BookUpdate,
)


class BookService:
    """Orchestrates book operations.

    Every method forwards to the repository unchanged; business rules that
    span several repository calls belong here.
    """

    def __init__(self, repository: BookRepository) -> None:
        self._repository = repository

    def create_book(self, data: BookCreate) -> Book:
        return self._repository.create(data)

    def update_book(self, book: Book, data: BookUpdate) -> Book:
        return self._repository.update(book, data)

    def delete_book(self, book: Book) -> None:
        self._repository.delete(book)

    def get_book(self, book_id: int) -> Book | None:
        return self._repository.get(book_id)

    def list_books(self, page: int, per_page: int) -> tuple[list[Book], int]:
        return self._repository.list_page(page, per_page)
