"""Key-value backends for users and progress records.

Repositories never touch a dict or a connection directly; they go through
a KeyValueStore so the backing storage can be swapped. Values are plain
JSON-compatible dicts and every read returns a private copy.

Provides:
- KeyValueStore: abstract interface
- MemoryStore: process-local dict (default, lost on restart)
- SqliteStore: single-table SQLite persistence
"""

from __future__ import annotations

import copy
import json
import sqlite3
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

import structlog

logger = structlog.get_logger(__name__)


class KeyValueStore(ABC):
    """Namespaced key-value storage for JSON-compatible dicts."""

    @abstractmethod
    def get(self, namespace: str, key: str) -> dict[str, Any] | None:
        """Return a copy of the stored value, or None."""

    @abstractmethod
    def put(self, namespace: str, key: str, value: dict[str, Any]) -> None:
        """Insert or replace a value."""

    @abstractmethod
    def insert(self, namespace: str, key: str, value: dict[str, Any]) -> bool:
        """Insert a value only if the key is free. Returns False if taken."""

    @abstractmethod
    def values(self, namespace: str) -> list[dict[str, Any]]:
        """Return copies of all values in a namespace."""

    def count(self, namespace: str) -> int:
        return len(self.values(namespace))


class MemoryStore(KeyValueStore):
    """In-process store. Nothing survives a restart."""

    def __init__(self):
        self._data: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def get(self, namespace: str, key: str) -> dict[str, Any] | None:
        with self._lock:
            value = self._data.get(namespace, {}).get(key)
            return copy.deepcopy(value) if value is not None else None

    def put(self, namespace: str, key: str, value: dict[str, Any]) -> None:
        with self._lock:
            self._data.setdefault(namespace, {})[key] = copy.deepcopy(value)

    def insert(self, namespace: str, key: str, value: dict[str, Any]) -> bool:
        with self._lock:
            bucket = self._data.setdefault(namespace, {})
            if key in bucket:
                return False
            bucket[key] = copy.deepcopy(value)
            return True

    def values(self, namespace: str) -> list[dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(v) for v in self._data.get(namespace, {}).values()]

    def count(self, namespace: str) -> int:
        with self._lock:
            return len(self._data.get(namespace, {}))


class SqliteStore(KeyValueStore):
    """SQLite-backed store. One row per (namespace, key), value as JSON."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._connect() as conn:
            _create_schema(conn)

        logger.info("database.initialized", path=str(self.db_path))

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        """Get database connection as context manager.

        Commits on success, rolls back on error, always closes.
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row

        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get(self, namespace: str, key: str) -> dict[str, Any] | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM records WHERE namespace = ? AND key = ?",
                (namespace, key),
            ).fetchone()
        return json.loads(row["value"]) if row else None

    def put(self, namespace: str, key: str, value: dict[str, Any]) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO records (namespace, key, value) VALUES (?, ?, ?)",
                (namespace, key, json.dumps(value)),
            )

    def insert(self, namespace: str, key: str, value: dict[str, Any]) -> bool:
        try:
            with self._connect() as conn:
                conn.execute(
                    "INSERT INTO records (namespace, key, value) VALUES (?, ?, ?)",
                    (namespace, key, json.dumps(value)),
                )
        except sqlite3.IntegrityError:
            return False
        return True

    def values(self, namespace: str) -> list[dict[str, Any]]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT value FROM records WHERE namespace = ? ORDER BY rowid",
                (namespace,),
            ).fetchall()
        return [json.loads(r["value"]) for r in rows]

    def count(self, namespace: str) -> int:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) AS n FROM records WHERE namespace = ?",
                (namespace,),
            ).fetchone()
        return row["n"]


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create the records table. Idempotent."""
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS records (
            namespace TEXT NOT NULL,
            key TEXT NOT NULL,
            value TEXT NOT NULL,
            PRIMARY KEY (namespace, key)
        );
        """
    )


def create_store(backend: str = "memory", sqlite_path: Path | None = None) -> KeyValueStore:
    """Build the configured backend.

    Args:
        backend: "memory" or "sqlite"
        sqlite_path: Database file for the sqlite backend

    Raises:
        ValueError: For an unknown backend name
    """
    if backend == "memory":
        return MemoryStore()
    if backend == "sqlite":
        return SqliteStore(sqlite_path or Path("db/training.db"))
    raise ValueError(f"Unknown storage backend '{backend}'")
