"""Engine and session factory for the catalog database."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config


class DbSessionService:
    """Owns the engine; hands out sessions to requests and scripts."""

    def __init__(self, config: ConfigData | None = None):
        config = config or get_config()
        self._db_config = config.database
        self._engine = create_engine(
            self._db_config.connection_string, **self._engine_options(config)
        )
        logger.info(
            "Database engine ready ({}, memory={})",
            self._db_config.backend,
            self._db_config.is_memory,
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def backend(self) -> str:
        return self._db_config.backend

    @staticmethod
    def _engine_options(config: ConfigData) -> dict[str, Any]:
        db = config.database
        options: dict[str, Any] = {"echo": db.echo}

        if db.backend == "sqlite":
            # Sessions are opened on the threadpool, not the creating thread
            options["connect_args"] = {"check_same_thread": False, "timeout": 20}
            if db.is_memory:
                # Every checkout must see the same in-memory database
                options["poolclass"] = StaticPool
            if config.app.environment == "production":
                logger.warning("Running production on SQLite; use PostgreSQL instead")
            return options

        options |= {
            "pool_size": db.pool_size,
            "max_overflow": db.max_overflow,
            "pool_timeout": db.pool_timeout,
            "pool_recycle": db.pool_recycle,
            "pool_pre_ping": True,
        }
        if db.backend == "postgresql":
            options["connect_args"] = {
                "application_name": f"{config.app.name}-{config.app.environment}",
                "connect_timeout": 30,
            }
        return options

    def get_session(self) -> Session:
        # Entities are built from rows after commit
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """Run a trivial query; False when the database cannot be reached."""
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False
        return True

    def get_pool_status(self) -> dict[str, int]:
        pool = self._engine.pool
        status = {}
        for key, method in (
            ("size", "size"),
            ("checked_in", "checkedin"),
            ("checked_out", "checkedout"),
            ("overflow", "overflow"),
        ):
            # StaticPool and friends do not track these counters
            status[key] = getattr(pool, method)() if hasattr(pool, method) else 0
        return status

    def dispose(self) -> None:
        self._engine.dispose()
