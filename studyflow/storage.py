"""
Durable key-value storage for the planner.

Uses SQLite for normal use and an in-memory dict for tests or throwaway
runs. Values are stored as JSON text under fixed namespace keys; the store
always reads and writes the whole session collection at once.

Automatically selects the backend based on environment variables.
"""

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from . import config


class SQLiteStorage:
    """Key-value storage backed by a single SQLite table."""

    def __init__(self, db_path: Optional[Path] = None):
        """Initialize SQLite storage.

        Args:
            db_path: Database file. Defaults to STUDYFLOW_DB_PATH or ~/.studyflow/studyflow.db
        """
        if db_path is None:
            db_path = config.DB_PATH
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        self.db_path = db_path
        self._init_db()

    def _init_db(self):
        """Initialize database schema."""
        conn = sqlite3.connect(self.db_path)
        conn.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value_json TEXT NOT NULL,
                timestamp TEXT NOT NULL
            )
        """)
        conn.commit()
        conn.close()

    def get(self, key: str, default: Any = None) -> Any:
        """Read a value by key.

        Missing or undecodable values return default; the failure is logged
        rather than raised.

        Args:
            key: Namespace key
            default: Value to return when the key is absent or unreadable

        Returns:
            Decoded JSON value, or default
        """
        try:
            conn = sqlite3.connect(self.db_path)
            try:
                cursor = conn.execute(
                    "SELECT value_json FROM kv_store WHERE key = ?",
                    (key,)
                )
                row = cursor.fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Storage read failed for {key}: {e}")
            return default

        if row is None:
            return default

        try:
            return json.loads(row[0])
        except json.JSONDecodeError as e:
            logger.warning(f"Stored value for {key} is not valid JSON: {e}")
            return default

    def set(self, key: str, value: Any):
        """Write a value, replacing any previous one atomically."""
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute(
                """
                INSERT OR REPLACE INTO kv_store (key, value_json, timestamp)
                VALUES (?, ?, ?)
                """,
                (key, json.dumps(value), datetime.now().isoformat())
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, key: str):
        """Remove a key if present."""
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()


class MemoryStorage:
    """Key-value storage kept in a dict. Values round-trip through JSON."""

    def __init__(self):
        self._data = {}

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        try:
            return json.loads(self._data[key])
        except json.JSONDecodeError as e:
            logger.warning(f"Stored value for {key} is not valid JSON: {e}")
            return default

    def set(self, key: str, value: Any):
        self._data[key] = json.dumps(value)

    def set_raw(self, key: str, raw: str):
        """Put raw text under a key, bypassing JSON encoding."""
        self._data[key] = raw

    def delete(self, key: str):
        self._data.pop(key, None)


def get_storage(db_path: Optional[Path] = None):
    """Get the appropriate storage backend based on environment.

    Returns:
        MemoryStorage if STUDYFLOW_STORAGE=memory, otherwise SQLiteStorage
    """
    if config.STORAGE_BACKEND == "memory":
        return MemoryStorage()
    return SQLiteStorage(db_path)
