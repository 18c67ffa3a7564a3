"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_MAX_STATEMENT_BYTES = 100 * 1024


def _env_int(name: str, default: int) -> int:
    """Read a positive integer environment variable."""
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{value}'")
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {parsed}")
    return parsed


def default_database_path() -> str:
    """Return ~/.fintrack/fintrack.db."""
    return str(Path.home() / ".fintrack" / "fintrack.db")


@dataclass(frozen=True)
class Settings:
    """fintrack settings.

    Environment variables:
        FINTRACK_DB_PATH: SQLite database file
        FINTRACK_MAX_STATEMENT_BYTES: largest statement accepted by import
        FINTRACK_LOG_LEVEL: logging level name (DEBUG, INFO, WARNING, ...)
    """

    database_path: str
    max_statement_bytes: int = DEFAULT_MAX_STATEMENT_BYTES
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, database_path: Optional[str] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            database_path: Explicit database path, overriding FINTRACK_DB_PATH
        """
        if database_path is None:
            database_path = os.environ.get("FINTRACK_DB_PATH") or default_database_path()
        return cls(
            database_path=database_path,
            max_statement_bytes=_env_int(
                "FINTRACK_MAX_STATEMENT_BYTES", DEFAULT_MAX_STATEMENT_BYTES
            ),
            log_level=os.environ.get("FINTRACK_LOG_LEVEL", "WARNING").upper(),
        )
