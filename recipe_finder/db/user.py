"""User record operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- NO direct import needed when using Core API

IDs are assigned by SQLite (INTEGER PRIMARY KEY). Username uniqueness is
enforced by the UNIQUE constraint; a duplicate insert raises
sqlite3.IntegrityError.
"""

import sqlite3


class UserOperations:
    """User record operations: lookup by username, lookup by id, insert."""

    def __init__(self, conn: sqlite3.Connection, autocommit: bool = False):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
            autocommit: Commit after each write
        """
        self._conn = conn
        self._autocommit = autocommit

    def get_by_username(self, username: str) -> sqlite3.Row | None:
        """Get user row by username, or None if absent."""
        cursor = self._conn.execute(
            "SELECT * FROM users WHERE username = ?",
            (username,)
        )
        return cursor.fetchone()

    def get_by_id(self, user_id: int) -> sqlite3.Row | None:
        """Get user row by id, or None if absent."""
        cursor = self._conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,)
        )
        return cursor.fetchone()

    def create(
        self,
        username: str,
        password_hash: str,
        first_name: str,
        last_name: str
    ) -> int:
        """Insert a user row.

        Args:
            username: Unique username
            password_hash: Bcrypt hash (never the plaintext password)
            first_name: First name
            last_name: Last name

        Returns:
            The store-assigned user id

        Raises:
            sqlite3.IntegrityError: If the username already exists
        """
        cursor = self._conn.execute(
            """INSERT INTO users (username, password, first_name, last_name)
               VALUES (?, ?, ?, ?)""",
            (username, password_hash, first_name, last_name)
        )
        if self._autocommit:
            self._conn.commit()
        return cursor.lastrowid
