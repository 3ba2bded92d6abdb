"""Key-value persistence backends holding named string slots."""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..core.models import utcnow
from ..logging_setup import get_logger

logger = get_logger(__name__)


class PersistenceBackend(Protocol):
    """Minimal slot interface used by the transaction store."""

    def get(self, key: str) -> Optional[str]:
        """Return the slot value or ``None`` when the slot is absent."""

    def set(self, key: str, value: str) -> None:
        """Create or overwrite the slot."""

    def delete(self, key: str) -> None:
        """Remove the slot; removing an absent slot is not an error."""


class MemoryBackend:
    """Process-local backend, mainly for tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._slots: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value

    def delete(self, key: str) -> None:
        self._slots.pop(key, None)


class JSONFileBackend:
    """Stores each slot as ``<directory>/<key>.json``."""

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._directory

    def _slot_path(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        try:
            return self._slot_path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self._slot_path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        # Atomic on POSIX and Windows when both paths share a filesystem.
        os.replace(tmp_path, path)
        logger.debug("Wrote slot %s to %s (%d bytes)", key, path, len(value))

    def delete(self, key: str) -> None:
        try:
            self._slot_path(key).unlink()
        except FileNotFoundError:
            return
        logger.debug("Deleted slot %s", key)


class SQLiteBackend:
    """Thin wrapper around a SQLite database holding a single ``slots`` table."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialized = False

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS slots (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
        self._initialized = True

    def get(self, key: str) -> Optional[str]:
        self._ensure_initialized()
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM slots WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return str(row["value"])

    def set(self, key: str, value: str) -> None:
        self._ensure_initialized()
        updated_at = utcnow().isoformat(timespec="seconds") + "Z"
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO slots (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, updated_at),
            )
        logger.debug("Wrote slot %s to %s (%d bytes)", key, self._db_path, len(value))

    def delete(self, key: str) -> None:
        self._ensure_initialized()
        with self._connect() as conn:
            conn.execute("DELETE FROM slots WHERE key = ?", (key,))
        logger.debug("Deleted slot %s", key)
