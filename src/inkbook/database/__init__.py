"""Database layer for inkbook application."""

from inkbook.database.base import Database
from inkbook.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
