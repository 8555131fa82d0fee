"""Book catalog HTTP application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.errors import register_error_handlers
from src.catalog.api.http.middleware import (
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
)
from src.catalog.api.http.routers.health import router as health_router
from src.catalog.api.http.routers.service.book import router as book_router
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.services import DbManageService, DbSessionService
from src.catalog.runtime.context import get_config

configure_logging()

__all__ = ["app", "startup", "shutdown"]


@asynccontextmanager
async def lifespan(_: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


def _build_app() -> FastAPI:
    config = get_config()
    cors = config.app.cors
    production = config.app.environment == "production"

    if production and "*" in cors.origins:
        raise RuntimeError(
            "Wildcard CORS origins are not allowed together with credentials "
            "in production"
        )

    application = FastAPI(
        title="Book Catalog API",
        lifespan=lifespan,
        docs_url=None if production else "/docs",
        redoc_url=None if production else "/redoc",
    )

    # Added last runs first: request context wraps everything else
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )
    application.add_middleware(RequestContextMiddleware)

    register_error_handlers(application)
    application.include_router(health_router)
    application.include_router(book_router)
    return application


app = _build_app()


async def startup() -> None:
    config = get_config()
    logger.info(
        "Starting {} ({} environment, {} database)",
        config.app.name,
        config.app.environment,
        config.database.backend,
    )

    database_service = DbSessionService(config)
    if config.database.create_tables:
        DbManageService(database_service.engine).create_all()

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service
    )


async def shutdown() -> None:
    dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if dependencies is not None:
        dependencies.database_service.dispose()
    logger.info("Stopped {}", get_config().app.name)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,
    )
