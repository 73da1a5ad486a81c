"""
Key-value persistence for the small amount of state the engine keeps.

Only the dismissed-suggestion set is stored today. Values must be
JSON-serializable.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable

from .exceptions import StoreError


logger = logging.getLogger(__name__)


STORE_SCHEMA = """
CREATE TABLE IF NOT EXISTS key_value_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for key-value store implementations."""

    def get(self, key: str) -> Optional[Any]:
        """Get value for key, None if missing."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Set value for key."""
        ...

    def delete(self, key: str) -> None:
        """Delete key if present."""
        ...


class InMemoryKeyValueStore:
    """Process-local store, used when no store path is configured."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        # Stored as JSON so callers can't mutate stored values in place
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Value for '{key}' is not JSON-serializable", key=key) from e

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SQLiteKeyValueStore:
    """
    Key-value store backed by a single SQLite table.

    Each call opens its own connection, so instances are cheap to create
    and safe to share between service objects.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self._init_db()

    def _init_db(self) -> None:
        """Initialize database table if it doesn't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._get_connection() as conn:
            conn.executescript(STORE_SCHEMA)

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open store at {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Store operation failed: {e}") from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get(self, key: str) -> Optional[Any]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM key_value_store WHERE key = ?",
                (key,),
            ).fetchone()

        if row is None:
            return None
        try:
            return json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise StoreError(f"Stored value for '{key}' is corrupt", key=key) from e

    def set(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Value for '{key}' is not JSON-serializable", key=key) from e

        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO key_value_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, payload),
            )
        logger.debug(f"Stored key '{key}' in {self.db_path}")

    def delete(self, key: str) -> None:
        with self._get_connection() as conn:
            conn.execute("DELETE FROM key_value_store WHERE key = ?", (key,))
