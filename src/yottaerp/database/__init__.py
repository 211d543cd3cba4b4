"""Database layer for yottaerp application."""

from yottaerp.database.base import Database
from yottaerp.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
