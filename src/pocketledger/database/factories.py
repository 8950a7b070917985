"""Factories for the databases pocketledger runs against."""

import os
from pathlib import Path
from typing import Optional

from pocketledger.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "POCKETLEDGER_DB_PATH"
DEFAULT_DATA_DIR = Path.home() / ".pocketledger"
DEFAULT_DB_FILENAME = "pocketledger.db"


def default_database_path() -> Path:
    """Location used when neither an argument nor the environment names one.

    The data directory is created on demand.
    """
    DEFAULT_DATA_DIR.mkdir(parents=True, exist_ok=True)
    return DEFAULT_DATA_DIR / DEFAULT_DB_FILENAME


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Open a file-backed SQLite database.

    Args:
        database_path: SQLite file. Falls back to ``POCKETLEDGER_DB_PATH``,
            then to ``~/.pocketledger/pocketledger.db``.

    Returns:
        SQLAlchemyDatabase bound to the file
    """
    path = database_path or os.environ.get(DB_PATH_ENV_VAR) or default_database_path()
    return SQLAlchemyDatabase(f"sqlite:///{path}")


def create_memory_database() -> SQLAlchemyDatabase:
    """Open a private in-memory SQLite database."""
    return SQLAlchemyDatabase("sqlite://")
