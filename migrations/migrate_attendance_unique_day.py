#!/usr/bin/env python3
"""Migration script to enforce one attendance record per staff member per day.

Databases created before the staff_attendance table carried the
uq_staff_attendance_day constraint may hold several check-ins for the same
staff member on the same day. This migration:
- deletes the duplicates, keeping the earliest check-in of each (staff_id, date)
- creates the unique index uq_staff_attendance_day on (staff_id, date)

Usage:
    python migrations/migrate_attendance_unique_day.py [--db-path PATH]
"""

import sys
from pathlib import Path

# Add src to path so we can import gymledger modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import text, inspect
from gymledger.database.factories import create_sqlite_database
from gymledger.database.models import AttendanceRecord

INDEX_NAME = "uq_staff_attendance_day"


def unique_day_enforced(engine) -> bool:
    """Check whether staff_attendance already rejects a second record per day.

    Args:
        engine: SQLAlchemy engine

    Returns:
        True if a unique constraint or unique index covers (staff_id, date)
    """
    inspector = inspect(engine)
    wanted = ["staff_id", "date"]
    for constraint in inspector.get_unique_constraints("staff_attendance"):
        if constraint["column_names"] == wanted:
            return True
    for index in inspector.get_indexes("staff_attendance"):
        if index.get("unique") and index["column_names"] == wanted:
            return True
    return False


def delete_duplicate_days(session) -> int:
    """Delete all but the earliest check-in of each staff member and day.

    Returns:
        Number of deleted records
    """
    seen = set()
    deleted = 0
    records = session.query(AttendanceRecord).order_by(
        AttendanceRecord.staff_id,
        AttendanceRecord.date,
        AttendanceRecord.check_in_time,
        AttendanceRecord.id,
    )
    for record in records.all():
        key = (record.staff_id, record.date)
        if key in seen:
            session.delete(record)
            deleted += 1
        else:
            seen.add(key)
    return deleted


def migrate_database(database_path: str | None = None) -> None:
    """Migrate database to enforce a single attendance record per day.

    Args:
        database_path: Path to database file. If None, uses default location.

    Raises:
        Exception: If migration fails
    """
    db = create_sqlite_database(database_path=database_path)
    db.connect()

    try:
        session = db.session_factory()
        try:
            engine = session.bind
            if engine is None:
                raise Exception("Could not get database engine from session")
        finally:
            session.close()

        inspector = inspect(engine)
        if "staff_attendance" not in inspector.get_table_names():
            raise Exception(
                "Table 'staff_attendance' does not exist. Please initialize the database schema first."
            )

        if unique_day_enforced(engine):
            print("Migration already applied: staff_attendance allows one record per day")
            return

        print("Starting migration: removing duplicate check-ins...")

        session = db.session_factory()
        try:
            deleted = delete_duplicate_days(session)
            session.commit()
            print(f"  Deleted {deleted} duplicate attendance record(s)")
        finally:
            session.close()

        with engine.begin() as conn:
            conn.execute(
                text(f"CREATE UNIQUE INDEX {INDEX_NAME} ON staff_attendance (staff_id, date)")
            )
            print(f"  Created unique index: {INDEX_NAME}")

        print("Migration completed successfully!")

    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    finally:
        db.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Migrate database to allow one attendance record per staff member per day"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides GYMLEDGER_DB_PATH environment variable)",
    )
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
