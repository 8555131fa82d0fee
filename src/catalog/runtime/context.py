"""Process-wide access to the active configuration.

The configuration lives in a ``ContextVar`` so tests (and individual
threads or tasks) can swap it without touching global state seen by others.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.config.config_template import load_templated_yaml
from src.catalog.runtime.config.settings import EnvironmentVariables


@dataclass(frozen=True)
class AppContext:
    config: ConfigData


env_vars = EnvironmentVariables()

_current: ContextVar[AppContext] = ContextVar(
    "catalog_context",
    default=AppContext(config=load_templated_yaml(env_vars.config_file)),
)


def get_context() -> AppContext:
    return _current.get()


def set_context(context: AppContext):
    """Make ``context`` current; returns the token needed to undo it."""
    return _current.set(context)


def get_config() -> ConfigData:
    return get_context().config


def set_config(config: ConfigData) -> None:
    set_context(replace(get_context(), config=config))


def _explicit_values(model: BaseModel) -> dict[str, Any]:
    """Collect the fields that were assigned on ``model`` or its sub-models."""
    values: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_values(value)
            if nested:
                values[name] = nested
                continue
        if name in model.model_fields_set:
            values[name] = value.model_dump() if isinstance(value, BaseModel) else value
    return values


def _merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Apply the explicitly set values of ``override_config`` on top of ``base_config``."""
    merged = _merge(base_config.model_dump(), _explicit_values(override_config))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Run a block with some configuration values replaced.

    Only values explicitly assigned on ``config_override`` take effect::

        override = ConfigData()
        override.catalog.page_size = 5
        with with_context(override):
            assert get_config().catalog.page_size == 5
    """
    if config_override is None:
        yield
        return
    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"Expected a ConfigData override, got {type(config_override).__name__}"
        )

    token = set_context(
        replace(get_context(), config=merge_configs(get_config(), config_override))
    )
    try:
        yield
    finally:
        _current.reset(token)
