"""Rendering of catalog errors as JSON responses."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.responses import JSONResponse

from src.catalog.core.exceptions import (
    BookNotFoundError,
    BookValidationError,
    PersistenceError,
)


def _validation_response(exc: BookValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422, content={"message": exc.summary, "errors": exc.errors}
    )


async def handle_book_validation(
    request: Request, exc: BookValidationError
) -> JSONResponse:
    logger.bind(fields=sorted(exc.errors)).info("Rejected book payload")
    return _validation_response(exc)


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies and query parameters like payload errors.

    The leading ``body``/``query`` location segment is dropped so a bad
    ``?page=0`` is reported under ``page``.
    """
    grouped: dict[str, list[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error["loc"]]
        field = ".".join(location[1:]) or (location[0] if location else "body")
        grouped.setdefault(field, []).append(error["msg"])
    return await handle_book_validation(request, BookValidationError(grouped))


async def handle_book_not_found(
    request: Request, exc: BookNotFoundError
) -> JSONResponse:
    logger.info("Book {} not found", exc.book_id)
    return JSONResponse(status_code=404, content={"message": "Book not found."})


async def handle_persistence_error(
    request: Request, exc: PersistenceError
) -> JSONResponse:
    logger.bind(cause=type(exc.__cause__).__name__).error("Persistence failure: {}", exc)
    return JSONResponse(status_code=500, content={"message": "Server Error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookValidationError, handle_book_validation)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(BookNotFoundError, handle_book_not_found)
    app.add_exception_handler(PersistenceError, handle_persistence_error)
