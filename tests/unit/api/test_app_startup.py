"""Tests for loguru configuration."""

import logging

from loguru import logger

from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import with_context


def test_file_sink_receives_stdlib_records(tmp_path):
    log_file = tmp_path / "logs" / "catalog.log"
    override = ConfigData()
    override.logging.file = str(log_file)
    override.logging.format = "plain"
    override.logging.level = "INFO"

    try:
        with with_context(override):
            configure_logging()
            logging.getLogger("catalog.tests").warning("from the stdlib")
            logger.info("from loguru")
            logger.complete()
    finally:
        configure_logging()

    content = log_file.read_text()
    assert "from the stdlib" in content
    assert "from loguru" in content


def test_json_file_sink(tmp_path):
    log_file = tmp_path / "catalog.json"
    override = ConfigData()
    override.logging.file = str(log_file)
    override.logging.format = "json"
    override.logging.level = "INFO"

    try:
        with with_context(override):
            configure_logging()
            logger.bind(request_id="abc").info("structured")
            logger.complete()
    finally:
        configure_logging()

    first_line = log_file.read_text().splitlines()[0]
    assert '"structured"' in first_line
    assert '"request_id": "abc"' in first_line
