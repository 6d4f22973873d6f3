from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Engine

from blog_api.runtime.config.config_data import DatabaseConfig


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores ``ON DELETE CASCADE`` and reference checks unless the
    pragma is set per connection.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def engine_kwargs_for(db_config: DatabaseConfig) -> dict[str, Any]:
    """Engine options for the configured backend."""
    if db_config.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}

    return {
        "pool_size": db_config.pool_size,
        "max_overflow": db_config.max_overflow,
        "pool_timeout": db_config.pool_timeout,
        "pool_recycle": db_config.pool_recycle,
        "pool_pre_ping": True,  # Validate connections before use
    }
