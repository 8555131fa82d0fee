"""Loading of ``config.yaml`` with ``${VAR}`` placeholders resolved from the environment."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from src.catalog.runtime.config.config_data import ConfigData

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def _resolve(expression: str) -> str:
    name, sep, fallback = expression.partition(":-")
    if sep:
        return os.environ.get(name, fallback)

    name, sep, hint = expression.partition(":?")
    value = os.environ.get(name)
    if value is not None:
        return value
    if sep:
        raise ValueError(f"Required environment variable {name}: {hint}")
    raise ValueError(f"Required environment variable {name} not set")


def substitute_env_vars(text: str) -> str:
    """Replace every placeholder in ``text``.

    ``${NAME}`` must be set, ``${NAME:-fallback}`` falls back to the given
    text and ``${NAME:?hint}`` fails with ``hint`` when ``NAME`` is unset.
    """
    return _PLACEHOLDER.sub(lambda match: _resolve(match.group(1)), text)


def apply_environment_overrides(env_mode: str) -> None:
    """Expose ``<ENV>_FOO`` variables as ``FOO`` for the active environment."""
    prefix = f"{env_mode.upper()}_"
    overrides = {
        name[len(prefix):]: value
        for name, value in os.environ.items()
        if name.startswith(prefix) and len(name) > len(prefix)
    }
    if overrides:
        logger.debug("Overriding {} from the {} environment", sorted(overrides), env_mode)
    os.environ.update(overrides)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Read ``file_path`` into a ConfigData.

    Model defaults are returned when the file does not exist.

    Raises:
        ValueError: A placeholder cannot be resolved, the YAML is malformed
            or empty, or a value does not fit the configuration models.
    """
    env_mode = os.environ.get("APP_ENVIRONMENT", "development")
    apply_environment_overrides(env_mode)

    if not file_path.exists():
        logger.warning("{} not found, falling back to built-in defaults", file_path)
        return ConfigData()

    rendered = substitute_env_vars(file_path.read_text(encoding="utf-8"))
    try:
        document = yaml.safe_load(rendered)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not isinstance(document, dict):
        raise ValueError(f"{file_path} does not contain a mapping")

    try:
        config = ConfigData.model_validate(document.get("config") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    logger.debug("Loaded {} for the {} environment", file_path, env_mode)
    return config
