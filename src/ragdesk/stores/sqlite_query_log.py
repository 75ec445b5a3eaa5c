# src/ragdesk/stores/sqlite_query_log.py
"""SQLite implementation of the query log."""

import sqlite3
from datetime import UTC, datetime
from pathlib import Path

from ragdesk.exceptions import LoggingError, StoreReadError
from ragdesk.models import QueryLogEntry
from ragdesk.stores.base import QueryLogStore


class SQLiteQueryLogStore(QueryLogStore):
    """SQLite-backed, append-only question/answer log."""

    def __init__(self, db_path: str) -> None:
        """Initialize the log.

        Args:
            db_path: Path to SQLite database file
        """
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._db_path = db_path
        self._init_db()

    def _init_db(self) -> None:
        """Initialize the database schema."""
        with sqlite3.connect(self._db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS query_log (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    question TEXT NOT NULL,
                    answer TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_created_at ON query_log(created_at)")

    def append(self, question: str, answer: str) -> QueryLogEntry:
        """Persist one answered question."""
        now = datetime.now(UTC)
        try:
            with sqlite3.connect(self._db_path) as conn:
                cursor = conn.execute(
                    "INSERT INTO query_log (question, answer, created_at) VALUES (?, ?, ?)",
                    (question, answer, now.isoformat()),
                )
                entry_id = cursor.lastrowid
        except sqlite3.Error as e:
            raise LoggingError(f"Failed to write query log entry: {e}") from e

        return QueryLogEntry(id=entry_id or 0, question=question, answer=answer, created_at=now)

    def list_recent(self, limit: int = 10) -> list[QueryLogEntry]:
        """Return the most recent entries, newest first."""
        try:
            with sqlite3.connect(self._db_path) as conn:
                cursor = conn.execute(
                    "SELECT id, question, answer, created_at FROM query_log "
                    "ORDER BY id DESC LIMIT ?",
                    (limit,),
                )
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise StoreReadError(f"Failed to read query log: {e}") from e

        return [
            QueryLogEntry(
                id=row[0],
                question=row[1],
                answer=row[2],
                created_at=datetime.fromisoformat(row[3]),
            )
            for row in rows
        ]

    def count(self) -> int:
        """Count the entries in the log."""
        try:
            with sqlite3.connect(self._db_path) as conn:
                row = conn.execute("SELECT COUNT(id) FROM query_log").fetchone()
        except sqlite3.Error as e:
            raise StoreReadError(f"Failed to count query log: {e}") from e
        return row[0] if row else 0
