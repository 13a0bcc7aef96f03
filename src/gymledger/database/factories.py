"""Database factory functions for creating database instances."""

import getpass
import os
from pathlib import Path
from typing import Optional

from gymledger.database.sqlalchemy_db import SQLAlchemyDatabase


def default_principal() -> Optional[str]:
    """Operator identity from GYMLEDGER_OPERATOR, falling back to the OS user."""
    principal = os.environ.get("GYMLEDGER_OPERATOR")
    if principal:
        return principal
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return None


def create_sqlite_database(
    database_path: Optional[str] = None, principal: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks GYMLEDGER_DB_PATH
            environment variable, then defaults to ~/.gymledger/gymledger.db
        principal: Operator identity. If None, see default_principal()

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("GYMLEDGER_DB_PATH")

    if database_path is None:
        # Default to ~/.gymledger/gymledger.db
        home = Path.home()
        db_dir = home / ".gymledger"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "gymledger.db")

    if principal is None:
        principal = default_principal()

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url, principal=principal)
