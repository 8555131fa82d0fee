"""Typed view of ``config.yaml``.

Every section has defaults, so an empty or missing file still yields a
usable development configuration backed by a local SQLite file.
"""

from typing import Literal

from pydantic import BaseModel, Field
from sqlalchemy.engine import URL, make_url


class CORSConfig(BaseModel):
    origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default_factory=lambda: ["*"])


class LoggingConfig(BaseModel):
    """Loguru sink settings."""

    level: str = "INFO"
    format: Literal["json", "plain"] = Field(
        default="plain", description="Format of the file sink"
    )
    file: str | None = Field(default=None, description="No file sink when unset")
    max_size_mb: int = Field(default=10, description="Rotate the file at this size")
    backup_count: int = Field(default=5, description="Rotated files to keep")


class DatabaseConfig(BaseModel):
    """Where books are stored and how connections are pooled.

    Pool settings only apply to server databases; SQLite ignores them.
    """

    url: str = "sqlite:///./catalog.db"
    create_tables: bool = Field(
        default=True, description="Create missing tables when the app starts"
    )
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 10
    pool_timeout: int = Field(default=30, description="Seconds to wait for a connection")
    pool_recycle: int = Field(default=1800, description="Seconds before reconnecting")

    @property
    def sqlalchemy_url(self) -> URL:
        return make_url(self.url)

    @property
    def backend(self) -> str:
        return self.sqlalchemy_url.get_backend_name()

    @property
    def is_memory(self) -> bool:
        """True for ``sqlite://`` and ``sqlite:///:memory:``."""
        return self.backend == "sqlite" and self.sqlalchemy_url.database in (
            None,
            "",
            ":memory:",
        )

    @property
    def connection_string(self) -> str:
        return self.sqlalchemy_url.render_as_string(hide_password=False)


class CatalogConfig(BaseModel):
    page_size: int = Field(default=10, ge=1, description="Books per list page")
    min_published_year: int = Field(
        default=1500, description="Earliest publication year accepted"
    )


class AppConfig(BaseModel):
    environment: Literal["development", "production", "test"] = "development"
    name: str = "book-catalog"
    host: str = "localhost"
    port: int = 8000
    cors: CORSConfig = Field(default_factory=CORSConfig)


class ConfigData(BaseModel):
    """Root of the ``config`` key in ``config.yaml``."""

    app: AppConfig = Field(default_factory=AppConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
