"""Unit tests for versioned schema migrations."""

import pytest
import sqlalchemy as sa
from sqlalchemy import StaticPool
from sqlmodel import create_engine

from blog_api.core.services import MigrationRunner, SchemaOutOfDateError
from blog_api.core.services.database.db_utils import enable_sqlite_foreign_keys
from blog_api.core.services.database.migrations import (
    MIGRATIONS,
    SCHEMA_TABLE,
    Migration,
    head_version,
)


@pytest.fixture
def empty_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    yield engine
    engine.dispose()


def _tables(engine) -> set[str]:
    return set(sa.inspect(engine).get_table_names())


class TestMigrationRunner:
    """Test applying and inspecting migrations."""

    def test_fresh_database_is_version_zero(self, empty_engine):
        runner = MigrationRunner(empty_engine)
        assert runner.current_version() == 0
        assert [m.version for m in runner.pending()] == [m.version for m in MIGRATIONS]

    def test_upgrade_to_head(self, empty_engine):
        runner = MigrationRunner(empty_engine)

        applied = runner.upgrade()

        assert applied == [m.version for m in MIGRATIONS]
        assert runner.current_version() == head_version()
        assert {"users", "posts", SCHEMA_TABLE} <= _tables(empty_engine)
        assert runner.pending() == []

    def test_upgrade_is_idempotent(self, empty_engine):
        runner = MigrationRunner(empty_engine)
        runner.upgrade()

        assert runner.upgrade() == []
        assert runner.current_version() == head_version()

    def test_upgrade_to_target(self, empty_engine):
        runner = MigrationRunner(empty_engine)

        assert runner.upgrade(target=1) == [1]
        assert runner.current_version() == 1
        assert runner.upgrade() == [2]

    def test_posts_are_indexed_by_user(self, empty_engine):
        MigrationRunner(empty_engine).upgrade()
        indexes = sa.inspect(empty_engine).get_indexes("posts")
        assert any(index["column_names"] == ["user_id"] for index in indexes)

    def test_post_foreign_key_cascades(self, empty_engine):
        MigrationRunner(empty_engine).upgrade()
        (fk,) = sa.inspect(empty_engine).get_foreign_keys("posts")
        assert fk["referred_table"] == "users"
        assert fk["options"].get("ondelete") == "CASCADE"

    def test_ensure_current_raises_on_stale_schema(self, empty_engine):
        runner = MigrationRunner(empty_engine)
        runner.upgrade(target=1)

        with pytest.raises(SchemaOutOfDateError) as excinfo:
            runner.ensure_current()

        assert excinfo.value.current == 1
        assert excinfo.value.head == head_version()
        assert "blog-api migrate" in str(excinfo.value)

    def test_ensure_current_passes_at_head(self, empty_engine):
        runner = MigrationRunner(empty_engine)
        runner.upgrade()
        runner.ensure_current()

    def test_failed_step_leaves_previous_version(self, empty_engine):
        def broken(connection):
            raise RuntimeError("step failed")

        migrations = MIGRATIONS + (Migration(head_version() + 1, "broken", broken),)
        runner = MigrationRunner(empty_engine, migrations)

        with pytest.raises(RuntimeError, match="step failed"):
            runner.upgrade()

        assert runner.current_version() == head_version()

    @pytest.mark.parametrize("versions", [(1, 1), (2, 1)])
    def test_versions_must_be_unique_and_ascending(self, empty_engine, versions):
        migrations = tuple(Migration(v, "noop", lambda c: None) for v in versions)
        with pytest.raises(ValueError):
            MigrationRunner(empty_engine, migrations)
