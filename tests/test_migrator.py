"""
Tests du moteur de migrations (ordre, idempotence, état dirty, règles de découverte).

Usage:
    python -m pytest tests/test_migrator.py -v
"""
import pytest
from sqlalchemy import inspect, text

from todo_api.core.config import DEFAULT_MIGRATIONS_DIR
from todo_api.db.migrator import (
    DirtyDatabaseError,
    MigrationError,
    Migrator,
    discover_migrations,
    resolve_migrations_dir,
    run_migrations,
    split_statements,
)


def _write(directory, name, sql):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_text(sql, encoding="utf-8")


@pytest.fixture
def migrations_dir(tmp_path):
    d = tmp_path / "migrations"
    _write(d, "000002_add_items.up.sql", "CREATE TABLE items (id INTEGER PRIMARY KEY);")
    _write(d, "000001_create_things.up.sql", "CREATE TABLE things (id INTEGER PRIMARY KEY);")
    _write(d, "000001_create_things.down.sql", "DROP TABLE things;")
    _write(d, "README.md", "not a migration")
    return d


# -----------------------------
# Discovery
# -----------------------------
def test_discover_sorts_by_version_and_skips_other_files(migrations_dir):
    found = discover_migrations(migrations_dir)
    assert [(m.version, m.name) for m in found] == [(1, "create_things"), (2, "add_items")]


def test_discover_rejects_duplicate_versions(migrations_dir):
    _write(migrations_dir, "1_other.up.sql", "SELECT 1;")
    with pytest.raises(MigrationError, match="Duplicate migration version 1"):
        discover_migrations(migrations_dir)


def test_discover_missing_directory(tmp_path):
    with pytest.raises(MigrationError, match="not found"):
        discover_migrations(tmp_path / "nope")


def test_resolve_prefers_dialect_subdirectory(tmp_path):
    (tmp_path / "sqlite").mkdir()
    assert resolve_migrations_dir(tmp_path, "sqlite") == tmp_path / "sqlite"
    assert resolve_migrations_dir(tmp_path, "postgresql") == tmp_path


def test_shipped_migrations_exist_for_each_dialect():
    for dialect in ("postgresql", "sqlite"):
        found = discover_migrations(DEFAULT_MIGRATIONS_DIR / dialect)
        assert [m.name for m in found] == ["create_todo_table"]


def test_split_statements_drops_comments_and_blanks():
    sql = "-- header; with a semicolon\nCREATE TABLE a (id INT);\n\nCREATE TABLE b (id INT);\n"
    assert split_statements(sql) == ["CREATE TABLE a (id INT)", "CREATE TABLE b (id INT)"]


# -----------------------------
# Apply
# -----------------------------
def test_up_applies_in_order_and_records_version(engine, migrations_dir):
    migrator = Migrator(engine, migrations_dir)
    applied = migrator.up()

    assert [m.version for m in applied] == [1, 2]
    assert {"things", "items", "schema_migrations"} <= set(inspect(engine).get_table_names())
    assert migrator.current_version() == (2, False)


def test_second_run_is_a_noop(engine, migrations_dir):
    assert run_migrations(engine, migrations_dir)
    assert run_migrations(engine, migrations_dir) == []


def test_only_new_migrations_are_applied(engine, migrations_dir):
    Migrator(engine, migrations_dir).up()
    _write(migrations_dir, "000003_add_more.up.sql", "CREATE TABLE more (id INTEGER PRIMARY KEY);")

    applied = Migrator(engine, migrations_dir).up()
    assert [m.version for m in applied] == [3]


def test_failed_migration_leaves_database_dirty(engine, migrations_dir):
    _write(migrations_dir, "000003_broken.up.sql", "CREATE TABLE things (id INTEGER PRIMARY KEY);")
    migrator = Migrator(engine, migrations_dir)

    with pytest.raises(MigrationError, match="000003|3_broken"):
        migrator.up()
    assert migrator.current_version() == (3, True)

    with pytest.raises(DirtyDatabaseError):
        migrator.up()


def test_dirty_database_is_refused(engine, migrations_dir):
    migrator = Migrator(engine, migrations_dir)
    migrator.up()
    with engine.begin() as conn:
        conn.execute(text("UPDATE schema_migrations SET dirty = 1"))

    with pytest.raises(DirtyDatabaseError) as excinfo:
        migrator.up()
    assert excinfo.value.version == 2


def test_shipped_sqlite_migration_creates_todo_table(engine):
    run_migrations(engine, DEFAULT_MIGRATIONS_DIR)
    columns = {c["name"] for c in inspect(engine).get_columns("todo")}
    assert columns == {"id", "title", "description", "is_done"}
