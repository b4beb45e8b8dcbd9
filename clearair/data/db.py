"""
Clear Air Habit — Document Database.

Local persistence: the profile, the habit list and the smoke-free days are
stored as independent JSON documents in a single SQLite key-value table, so
one corrupt document never blocks the others.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from clearair.ports.storage_port import PersistenceError

logger = logging.getLogger(__name__)

PROFILE_KEY = "userProfile"
HABITS_KEY = "habits"
SMOKE_FREE_DAYS_KEY = "smokingFreeDays"


class StateDB:
    """SQLite-backed storage for JSON documents keyed by name."""

    def __init__(self, db_path: str | None = None) -> None:
        if db_path is None:
            from clearair.config import settings
            db_path = settings.DATABASE_PATH

        self._db_path = db_path
        try:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            self._init_db()
        except (OSError, sqlite3.Error) as exc:
            raise PersistenceError(f"Cannot open database at {db_path}: {exc}") from exc

    @property
    def path(self) -> str:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        """Create the documents table if it doesn't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS documents (
                    key         TEXT PRIMARY KEY,
                    value       TEXT NOT NULL,
                    updated_at  TEXT NOT NULL
                )
            """)
        logger.debug("Documents table initialized at %s", self._db_path)

    def get_document(self, key: str) -> str | None:
        """Fetch the raw JSON stored under ``key``, or None if never written."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM documents WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Failed to read '{key}': {exc}") from exc
        if row is None:
            return None
        return row["value"]

    def put_document(self, key: str, value: str) -> None:
        """Insert or replace the document under ``key`` in one statement."""
        now = datetime.now(timezone.utc).isoformat()
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO documents (key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, now),
                )
        except sqlite3.Error as exc:
            raise PersistenceError(f"Failed to write '{key}': {exc}") from exc
        logger.debug("Document '%s' saved (%d bytes)", key, len(value))
