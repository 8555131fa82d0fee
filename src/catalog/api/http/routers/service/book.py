"""Book API router with CRUD operations."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from src.catalog.api.http.deps import (
    get_book_or_404,
    get_book_repository,
    get_book_service,
)
from src.catalog.api.http.resources import BookPage, present_book
from src.catalog.api.http.validation import validate_create, validate_update
from src.catalog.core.services import BookService
from src.catalog.entities.service.book import Book, BookRepository
from src.catalog.runtime.context import get_config

router = APIRouter(prefix="/books", tags=["books"])

JsonBody = dict[str, Any]


@router.get("")
def list_books(
    request: Request,
    page: int = Query(default=1, ge=1),
    service: BookService = Depends(get_book_service),
) -> dict[str, Any]:
    """List books, most recently created first."""
    per_page = get_config().catalog.page_size
    books, total = service.list_books(page, per_page)
    return BookPage.build(
        books, total=total, page=page, per_page=per_page, url=request.url
    ).to_json()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_book(
    payload: JsonBody = Body(...),
    repository: BookRepository = Depends(get_book_repository),
    service: BookService = Depends(get_book_service),
) -> dict[str, Any]:
    """Create a new book."""
    data = validate_create(payload, repository)
    return present_book(service.create_book(data))


@router.get("/{book_id}")
def get_book(book: Book = Depends(get_book_or_404)) -> dict[str, Any]:
    """Get a book by ID."""
    return present_book(book)


@router.api_route("/{book_id}", methods=["PUT", "PATCH"])
def update_book(
    payload: JsonBody | None = Body(default=None),
    book: Book = Depends(get_book_or_404),
    repository: BookRepository = Depends(get_book_repository),
    service: BookService = Depends(get_book_service),
) -> dict[str, Any]:
    """Update the supplied fields of a book; an empty request changes nothing."""
    data = validate_update(payload or {}, repository, book.id)
    return present_book(service.update_book(book, data))


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    book: Book = Depends(get_book_or_404),
    service: BookService = Depends(get_book_service),
) -> Response:
    """Delete a book."""
    service.delete_book(book)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
