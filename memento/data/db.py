"""
Memento — Record Store.

SQLite-backed implementation of the persistence contract: every record is
a JSON payload keyed by (kind, id). Collections keep insertion order and
are last-write-wins; there are no transactions spanning calls.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

KINDS = ("reminders", "house_tasks", "life_goals", "life_profile", "settings")


class RecordStore:
    """SQLite-backed storage for all memento record kinds."""

    def __init__(self, db_path: str | None = None) -> None:
        if db_path is None:
            from memento.config import settings
            db_path = settings.DATABASE_PATH

        self._db_path = db_path
        # An in-memory database lives only as long as its connection.
        self._shared_conn: sqlite3.Connection | None = None
        if db_path == ":memory:":
            self._shared_conn = self._open()
        else:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _connect(self) -> sqlite3.Connection:
        if self._shared_conn is not None:
            return self._shared_conn
        return self._open()

    def _init_db(self) -> None:
        """Create the records table if it doesn't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS records (
                    seq      INTEGER PRIMARY KEY AUTOINCREMENT,
                    kind     TEXT NOT NULL,
                    id       TEXT NOT NULL,
                    payload  TEXT NOT NULL,
                    UNIQUE (kind, id)
                )
            """)
        logger.debug("Records table initialized at %s", self._db_path)

    @staticmethod
    def _check_kind(kind: str) -> None:
        if kind not in KINDS:
            raise ValueError(f"Unknown record kind: {kind!r}")

    def list(self, kind: str) -> list[dict]:
        """Return every record of a kind, oldest first."""
        self._check_kind(kind)
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    "SELECT payload FROM records WHERE kind = ? ORDER BY seq",
                    (kind,),
                ).fetchall()
        except sqlite3.Error as exc:
            logger.error("Failed to list %s: %s", kind, exc)
            return []
        return [json.loads(row["payload"]) for row in rows]

    def get(self, kind: str, record_id: str) -> dict | None:
        """Fetch a single record by id. None if missing or unreadable."""
        self._check_kind(kind)
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT payload FROM records WHERE kind = ? AND id = ?",
                    (kind, str(record_id)),
                ).fetchone()
        except sqlite3.Error as exc:
            logger.error("Failed to read %s #%s: %s", kind, record_id, exc)
            return None
        if row is None:
            return None
        return json.loads(row["payload"])

    def append(self, kind: str, record: dict) -> bool:
        """Insert a record. Returns False if the id exists or the write fails."""
        self._check_kind(kind)
        record_id = str(record["id"])
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT INTO records (kind, id, payload) VALUES (?, ?, ?)",
                    (kind, record_id, json.dumps(record)),
                )
        except sqlite3.IntegrityError:
            logger.warning("Duplicate %s record id %s", kind, record_id)
            return False
        except sqlite3.Error as exc:
            logger.error("Failed to append %s #%s: %s", kind, record_id, exc)
            return False
        logger.info("Stored %s #%s", kind, record_id)
        return True

    def remove(self, kind: str, record_id: str) -> bool:
        """Permanently delete a record. Returns False when nothing was removed."""
        self._check_kind(kind)
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM records WHERE kind = ? AND id = ?",
                    (kind, str(record_id)),
                )
        except sqlite3.Error as exc:
            logger.error("Failed to remove %s #%s: %s", kind, record_id, exc)
            return False
        removed = cursor.rowcount > 0
        if removed:
            logger.info("Removed %s #%s", kind, record_id)
        return removed

    def update(self, kind: str, record_id: str, patch: dict) -> bool:
        """Shallow-merge `patch` into a stored record. The id never changes."""
        self._check_kind(kind)
        current = self.get(kind, record_id)
        if current is None:
            logger.warning("Update of missing %s #%s", kind, record_id)
            return False

        merged = {**current, **patch, "id": current["id"]}
        try:
            with self._connect() as conn:
                conn.execute(
                    "UPDATE records SET payload = ? WHERE kind = ? AND id = ?",
                    (json.dumps(merged), kind, str(record_id)),
                )
        except sqlite3.Error as exc:
            logger.error("Failed to update %s #%s: %s", kind, record_id, exc)
            return False
        logger.info("Updated %s #%s (%s)", kind, record_id, ", ".join(sorted(patch)))
        return True
