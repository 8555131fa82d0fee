import logging
import sys
from pathlib import Path

from loguru import logger

from src.catalog.runtime.context import get_config

PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> "
    "<level>{level: <8}</level> "
    "<magenta>{extra[request_id]}</magenta> "
    "<cyan>{name}:{line}</cyan> {message}"
)

# stdlib loggers that are too chatty at INFO
_QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "uvicorn.access": logging.CRITICAL,
    "faker": logging.WARNING,
}


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records (uvicorn, SQLAlchemy) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging() -> None:
    """Install the loguru sinks described by the ``logging`` config section."""
    config = get_config()
    settings = config.logging
    verbose_errors = config.app.environment != "production"

    logger.remove()
    logger.configure(extra={"request_id": "-"})
    logger.add(
        sys.stderr,
        level=settings.level,
        format=PLAIN_FORMAT,
        colorize=True,
        backtrace=verbose_errors,
        diagnose=verbose_errors,
    )

    if settings.file:
        log_path = Path(settings.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        json_lines = settings.format == "json"
        logger.add(
            log_path,
            level=settings.level,
            format="{message}" if json_lines else PLAIN_FORMAT,
            serialize=json_lines,
            rotation=f"{settings.max_size_mb} MB",
            retention=settings.backup_count,
            compression="zip",
            enqueue=True,
            backtrace=verbose_errors,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for existing in logging.root.manager.loggerDict.values():
        if isinstance(existing, logging.Logger):
            existing.handlers.clear()
            existing.propagate = True
    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    logger.debug(
        "Logging ready: level={} file={} format={}",
        settings.level,
        settings.file or "-",
        settings.format,
    )
