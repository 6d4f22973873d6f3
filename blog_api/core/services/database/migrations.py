"""Versioned schema migrations.

The schema is never synchronized from the ORM models. Instead, an ordered
tuple of ``Migration`` steps describes every change with SQLAlchemy Core, and
the applied versions are recorded in ``schema_migrations``. Steps are frozen
once released: a schema change is a new step with the next version number.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

import sqlalchemy as sa
from loguru import logger
from sqlalchemy.engine import Connection, Engine

SCHEMA_TABLE = "schema_migrations"

_version_metadata = sa.MetaData()

schema_migrations = sa.Table(
    SCHEMA_TABLE,
    _version_metadata,
    sa.Column("version", sa.Integer, primary_key=True, autoincrement=False),
    sa.Column("description", sa.String(255), nullable=False),
    sa.Column("applied_at", sa.DateTime(timezone=True), nullable=False),
)


class SchemaOutOfDateError(RuntimeError):
    """Raised when the database schema is behind the code's head version."""

    def __init__(self, current: int, head: int) -> None:
        super().__init__(
            f"Database schema is at version {current} but version {head} is required; "
            "run 'blog-api migrate' first"
        )
        self.current = current
        self.head = head


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    upgrade: Callable[[Connection], None]


def _create_users_and_posts(connection: Connection) -> None:
    metadata = sa.MetaData()
    sa.Table(
        "users",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
    )
    sa.Table(
        "posts",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    metadata.create_all(connection)


def _index_posts_user_id(connection: Connection) -> None:
    posts = sa.Table("posts", sa.MetaData(), autoload_with=connection)
    sa.Index("ix_posts_user_id", posts.c.user_id).create(connection)


MIGRATIONS: tuple[Migration, ...] = (
    Migration(1, "create users and posts tables", _create_users_and_posts),
    Migration(2, "index posts by owning user", _index_posts_user_id),
)


def head_version(migrations: tuple[Migration, ...] = MIGRATIONS) -> int:
    return max((m.version for m in migrations), default=0)


class MigrationRunner:
    """Apply and inspect schema migrations against one engine."""

    def __init__(
        self, engine: Engine, migrations: tuple[Migration, ...] = MIGRATIONS
    ) -> None:
        versions = [m.version for m in migrations]
        if versions != sorted(set(versions)):
            raise ValueError("Migration versions must be unique and ascending")
        self._engine = engine
        self._migrations = migrations

    def head_version(self) -> int:
        return head_version(self._migrations)

    def current_version(self) -> int:
        """Highest applied version, 0 for an empty database."""
        with self._engine.connect() as connection:
            if not sa.inspect(connection).has_table(SCHEMA_TABLE):
                return 0
            current = connection.execute(
                sa.select(sa.func.max(schema_migrations.c.version))
            ).scalar()
        return current or 0

    def pending(self) -> list[Migration]:
        current = self.current_version()
        return [m for m in self._migrations if m.version > current]

    def upgrade(self, target: int | None = None) -> list[int]:
        """Apply pending migrations up to ``target`` (default: head).

        Each step runs in its own transaction together with its bookkeeping
        row, so a failed step leaves the schema at the previous version.

        Returns:
            Versions applied by this call, in order.
        """
        with self._engine.begin() as connection:
            _version_metadata.create_all(connection)

        applied = []
        for migration in self.pending():
            if target is not None and migration.version > target:
                break
            logger.info(
                "Applying migration {}: {}", migration.version, migration.description
            )
            with self._engine.begin() as connection:
                migration.upgrade(connection)
                connection.execute(
                    schema_migrations.insert().values(
                        version=migration.version,
                        description=migration.description,
                        applied_at=datetime.now(UTC),
                    )
                )
            applied.append(migration.version)

        if applied:
            logger.info("Database schema upgraded to version {}", applied[-1])
        else:
            logger.info("Database schema already up to date")
        return applied

    def ensure_current(self) -> None:
        """Raise ``SchemaOutOfDateError`` unless every migration is applied."""
        current = self.current_version()
        head = self.head_version()
        if current < head:
            raise SchemaOutOfDateError(current, head)
