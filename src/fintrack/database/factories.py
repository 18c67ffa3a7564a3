"""Database factory functions for creating database instances."""

from pathlib import Path
from typing import Optional

from fintrack.config import Settings
from fintrack.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks FINTRACK_DB_PATH
            environment variable, then defaults to ~/.fintrack/fintrack.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = Settings.from_env().database_path

    Path(database_path).parent.mkdir(parents=True, exist_ok=True)
    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
