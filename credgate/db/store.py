"""Credential store interface and its SQLite implementation."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from ..auth.schemas import UserRecord
from ..exceptions import DuplicateEmail, StoreUnavailable
from .connection import create_connection
from .user import UserOperations

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """What the auth service needs from user storage.

    Implementations must enforce email uniqueness atomically on create and
    report failures only as DuplicateEmail or StoreUnavailable.
    """

    def create_user(self, email: str, password_hash: str) -> int:
        ...

    def get_user_by_email(self, email: str) -> UserRecord | None:
        ...

    def get_user_by_id(self, user_id: int) -> UserRecord | None:
        ...


class SQLiteCredentialStore:
    """
    SQLite-backed credential store.

    Each public method runs on its own connection: commit on success,
    rollback on error, always close. No connection is shared between calls.
    """

    def __init__(self, database_path: str):
        """Initialize the store.

        Args:
            database_path: Path to the SQLite database file. The schema must
                already be applied (see credgate.db.init_db).
        """
        self._database_path = database_path

    @contextmanager
    def _users(self) -> Iterator[UserOperations]:
        try:
            conn = create_connection(self._database_path)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Could not open credential store: {e}")
            raise StoreUnavailable("Credential store is unavailable") from e

        try:
            yield UserOperations(conn)
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def create_user(self, email: str, password_hash: str) -> int:
        """
        Persist a new user.

        Returns:
            The store-assigned user id

        Raises:
            DuplicateEmail: If the email is already registered
            StoreUnavailable: For any other storage failure
        """
        try:
            with self._users() as users:
                return users.create(email, password_hash)
        except sqlite3.IntegrityError as e:
            if "UNIQUE" in str(e):
                raise DuplicateEmail(
                    "Email is already registered",
                    {"email": email}
                ) from e
            logger.error(f"Integrity error creating user: {e}")
            raise StoreUnavailable("Credential store rejected the write") from e
        except sqlite3.Error as e:
            logger.error(f"Store error creating user: {e}")
            raise StoreUnavailable("Credential store is unavailable") from e

    def get_user_by_email(self, email: str) -> UserRecord | None:
        """
        Look up a user by (normalized) email.

        Returns:
            UserRecord or None if no user has this email

        Raises:
            StoreUnavailable: If the lookup fails
        """
        try:
            with self._users() as users:
                return users.get_by_email(email)
        except sqlite3.Error as e:
            logger.error(f"Store error looking up user by email: {e}")
            raise StoreUnavailable("Credential store is unavailable") from e

    def get_user_by_id(self, user_id: int) -> UserRecord | None:
        try:
            with self._users() as users:
                return users.get_by_id(user_id)
        except sqlite3.Error as e:
            logger.error(f"Store error looking up user {user_id}: {e}")
            raise StoreUnavailable("Credential store is unavailable") from e
