"""Database layer for gymledger application."""

from gymledger.database.base import Database
from gymledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
