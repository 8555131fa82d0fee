from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentVariables(BaseSettings):
    """Bootstrap values read before ``config.yaml`` is loaded."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    config_file: Path = Field(
        default=Path("config.yaml"), validation_alias="CATALOG_CONFIG_FILE"
    )
