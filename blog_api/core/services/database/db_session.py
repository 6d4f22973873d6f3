"""Database engine and session factory used across the application."""

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from blog_api.core.services.database.db_utils import (
    enable_sqlite_foreign_keys,
    engine_kwargs_for,
)
from blog_api.runtime.config.config_data import DatabaseConfig
from blog_api.runtime.context import get_config


class DbSessionService:
    def __init__(
        self,
        db_config: DatabaseConfig | None = None,
        engine: Engine | None = None,
    ):
        """Initialize the shared database engine and session factory.

        Args:
            db_config: Database settings; defaults to the active configuration.
            engine: Pre-built engine to use instead of creating one.
        """
        if engine is None:
            db_config = db_config or get_config().database
            logger.info(
                "Initializing database engine for {}",
                db_config.safe_connection_string,
            )
            engine = create_engine(
                db_config.connection_string,
                echo=False,
                **engine_kwargs_for(db_config),
            )

        enable_sqlite_foreign_keys(engine)
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Prevent lazy loading issues
            autoflush=True,
        )

    def check_connection(self) -> None:
        """Run a trivial query; raises the driver error when the store is unreachable."""
        with self._engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            self.check_connection()
            return True
        except Exception as e:
            logger.error(
                "Database health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    def dispose(self) -> None:
        """Close all pooled connections."""
        self._engine.dispose()
