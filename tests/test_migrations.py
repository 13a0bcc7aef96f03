"""Tests for the attendance unique-day migration script."""

import importlib.util
from datetime import date, datetime
from pathlib import Path

import pytest
from sqlalchemy import create_engine, text

from gymledger.database.factories import create_sqlite_database
from gymledger.domain.errors import AlreadyCheckedInError

MIGRATION = Path(__file__).parent.parent / "migrations" / "migrate_attendance_unique_day.py"


@pytest.fixture
def migration():
    module_spec = importlib.util.spec_from_file_location("migrate_attendance_unique_day", MIGRATION)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


@pytest.fixture
def legacy_db_path(tmp_path):
    """A database whose staff_attendance table has no unique constraint."""
    path = tmp_path / "legacy.db"
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE staff (id INTEGER PRIMARY KEY, name VARCHAR NOT NULL, "
                "role VARCHAR NOT NULL, staff_code VARCHAR NOT NULL UNIQUE, "
                "schedule VARCHAR, salary NUMERIC(10, 2) NOT NULL)"
            )
        )
        conn.execute(
            text(
                "CREATE TABLE staff_attendance (id INTEGER PRIMARY KEY, "
                "staff_id INTEGER NOT NULL REFERENCES staff (id), date DATE NOT NULL, "
                "check_in_time DATETIME NOT NULL, status VARCHAR NOT NULL)"
            )
        )
        conn.execute(
            text("INSERT INTO staff VALUES (1, 'Carla Dias', 'Instructor', '1234', NULL, 0)")
        )
        for check_in in ("2024-06-10 09:00:00.000000", "2024-06-10 08:00:00.000000"):
            conn.execute(
                text(
                    "INSERT INTO staff_attendance (staff_id, date, check_in_time, status) "
                    "VALUES (1, '2024-06-10', :check_in, 'present')"
                ),
                {"check_in": check_in},
            )
    engine.dispose()
    return str(path)


def test_migration_keeps_earliest_check_in(migration, legacy_db_path):
    migration.migrate_database(database_path=legacy_db_path)

    db = create_sqlite_database(database_path=legacy_db_path, principal="frontdesk")
    try:
        record = db.get_attendance(1, date(2024, 6, 10))
        assert record.check_in_time == datetime(2024, 6, 10, 8, 0)
        assert db.get_staff_attendance_count(1) == 1

        with pytest.raises(AlreadyCheckedInError):
            db.create_attendance(1, date(2024, 6, 10), datetime(2024, 6, 10, 10, 0))
    finally:
        db.disconnect()


def test_migration_is_idempotent(migration, legacy_db_path, capsys):
    migration.migrate_database(database_path=legacy_db_path)
    migration.migrate_database(database_path=legacy_db_path)

    assert "Migration already applied" in capsys.readouterr().out


def test_fresh_database_needs_no_migration(migration, tmp_path, capsys):
    migration.migrate_database(database_path=str(tmp_path / "fresh.db"))
    assert "Migration already applied" in capsys.readouterr().out
