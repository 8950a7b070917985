"""Database layer for pocketledger application."""

from pocketledger.database.base import Database
from pocketledger.database.factories import create_memory_database, create_sqlite_database

__all__ = ["Database", "create_memory_database", "create_sqlite_database"]
