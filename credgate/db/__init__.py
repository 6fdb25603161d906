"""Database module for credgate.

This module is the Credential Store: the durable mapping from email to user
record. It is an external collaborator of the auth service, injected into
AuthService rather than reached through a process-wide handle.

ARCHITECTURE:
- SQLiteCredentialStore opens one connection per operation and closes it
  afterwards, so a single store instance is safe to share across threads.
- Duplicate detection relies on the UNIQUE index on users.email, which SQLite
  enforces atomically on insert.
- sqlite3 errors never escape the store: they surface as DuplicateEmail or
  StoreUnavailable.
"""

from pathlib import Path

from .connection import create_connection
from .store import CredentialStore, SQLiteCredentialStore

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


def init_db(database_path: str) -> None:
    """Initialize database by running schema.sql if not already initialized."""
    conn = create_connection(database_path)
    try:
        # Check if database is already initialized
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            return

        # Fresh database - apply current schema
        conn.executescript(SCHEMA_PATH.read_text())
        conn.commit()
    finally:
        conn.close()


def get_schema_version(database_path: str) -> str:
    """
    Get current schema version from _schema_metadata table.

    Returns:
        Schema version string (e.g., '20261019')
    """
    conn = create_connection(database_path)
    try:
        row = conn.execute(
            "SELECT value FROM _schema_metadata WHERE key = 'version'"
        ).fetchone()
    finally:
        conn.close()
    return row[0] if row else "unknown"


__all__ = [
    "CredentialStore",
    "SQLiteCredentialStore",
    "create_connection",
    "init_db",
    "get_schema_version",
]
