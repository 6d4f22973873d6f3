"""Core services exports."""

from .database.db_session import DbSessionService
from .database.migrations import MigrationRunner, SchemaOutOfDateError

__all__ = [
    "DbSessionService",
    "MigrationRunner",
    "SchemaOutOfDateError",
]
