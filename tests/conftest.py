"""Test configuration: every test runs against in-memory SQLite."""

import os

# Must be set before src.catalog.runtime.context loads config.yaml
os.environ["APP_ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_FILE"] = ""

from tests.fixtures import *  # noqa: E402,F401,F403
