"""Database module for Recipe Finder Core.

This module provides the Core API for database operations.
Core encapsulates connection management and exposes the user store.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- Connection closes on context exit (atomic=True) or when Core is collected
- Each record type gets an encapsulated operations class

The auth service only depends on the operations object (core.user), so any
object offering get_by_username/get_by_id/create can replace it.
"""

from pathlib import Path
from typing import TYPE_CHECKING
import sqlite3
from ..config import settings

if TYPE_CHECKING:
    from .user import UserOperations


class Core:
    """
    Database Core with record operations.

    Connection Lifecycle:
    - atomic=True: Connection commits/rolls back and closes on __exit__
    - atomic=False: Autocommit after each write, connection closes on collection
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
                    If False, Core has autocommit semantics.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None

    @property
    def user(self) -> "UserOperations":
        """User record operations (lazy-loaded, cached)."""
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn, autocommit=not self._atomic)
        return self._user_ops

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()

    def __del__(self):
        """Close the connection if still open.

        Errors are ignored: the connection may already be closed.
        """
        if hasattr(self, "_conn") and self._conn:
            try:
                self._conn.close()
            except sqlite3.Error:
                pass


def _create_connection() -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
        and foreign keys enabled.
    """
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_core(atomic: bool = False) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                Use when several writes need to commit together.
                If False (default), each write commits immediately.

    Examples:
        Autocommit mode:
        >>> core = get_core()
        >>> row = core.user.get_by_username("alice")

        Atomic mode:
        >>> with get_core(atomic=True) as core:
        ...     user_id = core.user.create("alice", password_hash, "A", "L")
        ...     row = core.user.get_by_id(user_id)
    """
    conn = _create_connection()
    return Core(conn, atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def init_db():
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with sqlite3.connect(str(db_path)) as db:
        cursor = db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        schema_path = Path(__file__).parent.parent / "schema" / "schema.sql"
        with open(schema_path, "r") as f:
            schema_sql = f.read()
        db.executescript(schema_sql)
        db.commit()


def get_schema_version() -> str:
    """Get current schema version from _schema_metadata table."""
    core = get_core()
    cursor = core._conn.execute(
        "SELECT value FROM _schema_metadata WHERE key = 'version'"
    )
    row = cursor.fetchone()
    return row[0] if row else "unknown"
