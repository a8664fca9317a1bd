import os
import sqlite3
import threading
from pathlib import Path
from typing import Dict, List, Optional

from colored_logger import get_colored_logger

logger = get_colored_logger(__name__)


class KeyValueStorage:
    """
    Minimal string key-value medium used by the tag store.

    Implementations must return keys in insertion order and let their own
    errors propagate to the caller.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def keys(self, prefix: str = "") -> List[str]:
        raise NotImplementedError

    def close(self) -> None:
        """Release any held resources."""


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage for tests and throwaway sessions."""

    def __init__(self, initial: Dict[str, str] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def keys(self, prefix: str = "") -> List[str]:
        with self._lock:
            return [key for key in self._data if key.startswith(prefix)]


class SqliteStorage(KeyValueStorage):
    """
    SQLite-backed key-value storage.

    Keeps every entry in a single kv_store table. Overwriting a key keeps its
    original position in keys() order.
    """

    def __init__(self, db_path: str = None):
        """
        Initialize the storage file.

        Args:
            db_path: Path to SQLite database file. If None, uses default location.
        """
        if db_path is None:
            db_path = os.path.join(os.getcwd(), "docsearch.db")

        self.db_path = db_path
        self._init_database()

    def _init_database(self) -> None:
        """Create the key-value table if needed."""
        try:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                """
                )

            logger.debug("Key-value storage initialized at %s", self.db_path)

        except sqlite3.Error as e:
            logger.error("Failed to initialize key-value storage: %s", e)
            raise

    def get(self, key: str) -> Optional[str]:
        try:
            with sqlite3.connect(self.db_path) as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
            return row[0] if row else None

        except sqlite3.Error as e:
            logger.error("Failed to read key '%s': %s", key, e)
            raise

    def set(self, key: str, value: str) -> None:
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                    (key, value),
                )

        except sqlite3.Error as e:
            logger.error("Failed to write key '%s': %s", key, e)
            raise

    def keys(self, prefix: str = "") -> List[str]:
        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.execute(
                    "SELECT key FROM kv_store ORDER BY rowid"
                )
                return [row[0] for row in cursor if row[0].startswith(prefix)]

        except sqlite3.Error as e:
            logger.error("Failed to enumerate keys with prefix '%s': %s", prefix, e)
            raise
