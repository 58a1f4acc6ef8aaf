"""SQLite cache for translation responses to avoid redundant upstream calls."""

from __future__ import annotations

import sqlite3
import time
from collections.abc import Callable
from pathlib import Path

DEFAULT_CACHE_DIR = Path.home() / ".posttranslator"
DEFAULT_CACHE_DB = DEFAULT_CACHE_DIR / "cache.db"

DEFAULT_TTL_SECONDS = 24 * 60 * 60

_SCHEMA = """
CREATE TABLE IF NOT EXISTS responses (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    expires_at REAL NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def make_cache_key(
    document_id: object,
    edited_at: object,
    target_locale: str,
    provider_region: str,
    batch: bool,
) -> str:
    """Key for one rendered translation.

    The edit timestamp is part of the key, so editing a post invalidates its
    cached translations without explicit eviction.
    """
    edited = "" if edited_at is None else edited_at
    flag = "true" if batch else "false"
    return f"translation:{document_id}:{edited}:{target_locale}:{provider_region}:{flag}"


class ResponseCache:
    """Persistent key -> response JSON store with a per-entry time-to-live."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if db_path is None:
            db_path = DEFAULT_CACHE_DB
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    @property
    def path(self) -> Path:
        return self._db_path

    def get(self, key: str) -> str | None:
        """Look up a cached response. Returns None if missing or expired."""
        cursor = self._conn.execute(
            "SELECT value, expires_at FROM responses WHERE key = ?", (key,),
        )
        row = cursor.fetchone()
        if row is None:
            return None
        value, expires_at = row
        if expires_at <= self._clock():
            self._conn.execute("DELETE FROM responses WHERE key = ?", (key,))
            self._conn.commit()
            return None
        return value

    def put(self, key: str, value: str, ttl: float = DEFAULT_TTL_SECONDS) -> None:
        """Store a response; an existing entry under the same key is replaced."""
        self._conn.execute(
            "INSERT OR REPLACE INTO responses (key, value, expires_at) VALUES (?, ?, ?)",
            (key, value, self._clock() + ttl),
        )
        self._conn.commit()

    def count(self) -> int:
        """Return total number of stored responses, expired ones included."""
        cursor = self._conn.execute("SELECT COUNT(*) FROM responses")
        return cursor.fetchone()[0]  # type: ignore[return-value]

    def purge_expired(self) -> int:
        """Delete expired entries. Returns number of entries deleted."""
        cursor = self._conn.execute(
            "DELETE FROM responses WHERE expires_at <= ?", (self._clock(),),
        )
        self._conn.commit()
        return cursor.rowcount

    def clear(self) -> int:
        """Clear all cached responses. Returns number of entries deleted."""
        cursor = self._conn.execute("DELETE FROM responses")
        self._conn.commit()
        return cursor.rowcount

    def close(self) -> None:
        self._conn.close()
