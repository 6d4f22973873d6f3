"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field
from sqlalchemy.engine import URL, make_url


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=3000, description="HTTP listen port")


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str | None = Field(default=None, description="Optional log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model.

    Either ``url`` is given as a complete SQLAlchemy URL, or the connection
    string is assembled from ``driver``, ``host``, ``port``, ``user``,
    ``password`` and ``name``.
    """

    url: str | None = Field(
        default=None,
        description="Full database URL; takes precedence over the individual parts",
    )
    driver: str = Field(
        default="postgresql+psycopg2", description="SQLAlchemy driver name"
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    user: str = Field(default="root", description="Database username")
    password: str | None = Field(default="password", description="Database password")
    name: str = Field(default="test_db", description="Database name")
    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=5, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    startup_delay_seconds: float = Field(
        default=0,
        ge=0,
        description="Seconds to wait before the first connection attempt",
    )
    migrate_on_startup: bool = Field(
        default=False,
        description="Apply pending schema migrations when the API starts",
    )

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string."""
        if self.url:
            return self.url

        url = URL.create(
            drivername=self.driver,
            username=self.user or None,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.name,
        )
        return url.render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.connection_string).get_backend_name() == "sqlite"

    @property
    def safe_connection_string(self) -> str:
        """Connection string with the password masked, suitable for logs."""
        return make_url(self.connection_string).render_as_string(hide_password=True)


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    def warn_on_insecure_defaults(self) -> None:
        """Log a warning when production runs with the stock database password."""
        if self.app.environment != "production":
            return
        if self.database.url is None and self.database.password == "password":
            logger.warning(
                "Database password is the built-in default in production; "
                "set DB_PASSWORD or DATABASE_URL."
            )
