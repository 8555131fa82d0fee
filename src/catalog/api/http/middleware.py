"""HTTP middleware: per-request logging context and response hardening."""

import time
import uuid

from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse, Response

from src.catalog.runtime.context import get_config

REQUEST_ID_HEADER = "X-Request-ID"

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}
_HSTS = "max-age=31536000; includeSubDomains"


def _client_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",", 1)[0].strip()
    return request.client.host if request.client else "unknown"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        headers = dict(_SECURITY_HEADERS)
        if get_config().app.environment == "production":
            headers["Strict-Transport-Security"] = _HSTS
        for name, value in headers.items():
            response.headers.setdefault(name, value)
        return response


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every log line of a request with its id and time the request.

    The id is taken from the incoming ``X-Request-ID`` header when present and
    echoed back on the response. Exceptions that escape the exception
    handlers are logged here and turned into a bare 500.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        started = time.perf_counter()

        with logger.contextualize(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=_client_address(request),
        ):
            logger.info("request.start")
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.bind(
                    status_code=500,
                    elapsed_ms=_elapsed_ms(started),
                    error_type=type(exc).__name__,
                ).exception("request.failed")
                response = JSONResponse(
                    status_code=500,
                    content={"message": "Server Error", "request_id": request_id},
                )
            else:
                logger.bind(
                    status_code=response.status_code,
                    elapsed_ms=_elapsed_ms(started),
                ).info("request.end")

        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 1)
