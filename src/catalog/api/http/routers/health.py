"""Health check endpoints router for monitoring service availability."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.catalog.api.http.deps import get_database_service
from src.catalog.api.http.resources import to_iso8601
from src.catalog.core.services import DbSessionService

router = APIRouter(tags=["health"])


@router.get("/ping")
async def ping() -> dict[str, str | None]:
    """Report the current server time; does not touch the database."""
    return {"pong": to_iso8601(datetime.now(UTC))}


@router.get("/health")
async def health() -> dict[str, str]:
    """Basic health check endpoint - checks if app is running.

    This is a liveness probe that returns 200 OK as long as the application
    process is running. It does not check dependencies.
    """
    return {"status": "healthy", "service": "api"}


@router.get("/health/database", response_model=None)
def health_database(
    database_service: DbSessionService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Database-specific health check with connection pool status."""
    healthy = database_service.health_check()
    result: dict[str, Any] = {
        "status": "healthy" if healthy else "unhealthy",
        "type": database_service.backend,
        "pool": database_service.get_pool_status(),
    }
    if not healthy:
        return JSONResponse(status_code=503, content=result)
    return result
