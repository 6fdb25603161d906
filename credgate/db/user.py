"""User table operations.

Thin wrappers over SQL against a caller-owned connection. Transaction
boundaries and error translation belong to SQLiteCredentialStore.
"""

import sqlite3

from ..auth.schemas import UserRecord
from ..utils import isodatetime


def _row_to_user_record(row: sqlite3.Row) -> UserRecord:
    return UserRecord(
        id=row["id"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=isodatetime.to_datetime(row["created_at"]),
    )


class UserOperations:
    """User operations bound to a single connection."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def create(self, email: str, password_hash: str) -> int:
        """Insert a user row and return its store-assigned id.

        Raises:
            sqlite3.IntegrityError: If the email is already registered
        """
        cursor = self._conn.execute(
            """INSERT INTO users (email, password_hash, created_at)
               VALUES (?, ?, ?)""",
            (email, password_hash, isodatetime.now())
        )
        return cursor.lastrowid

    def get_by_email(self, email: str) -> UserRecord | None:
        row = self._conn.execute(
            "SELECT id, email, password_hash, created_at FROM users WHERE email = ?",
            (email,)
        ).fetchone()
        return _row_to_user_record(row) if row else None

    def get_by_id(self, user_id: int) -> UserRecord | None:
        row = self._conn.execute(
            "SELECT id, email, password_hash, created_at FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()
        return _row_to_user_record(row) if row else None
