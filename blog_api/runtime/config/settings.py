from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_FILE = Path(__file__).with_name("config.yaml")


class EnvironmentVariables(BaseSettings):
    """Bootstrap values loaded from environment variables and .env files.

    Everything else is configured through config.yaml.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    app_environment: Literal["development", "production", "test"] = Field(
        default="development"
    )
    app_config_file: Path = Field(default=DEFAULT_CONFIG_FILE)
