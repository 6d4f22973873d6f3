"""Configuration models and loaders."""

from .config_data import AppConfig, ConfigData, DatabaseConfig, LoggingConfig

__all__ = ["AppConfig", "ConfigData", "DatabaseConfig", "LoggingConfig"]
