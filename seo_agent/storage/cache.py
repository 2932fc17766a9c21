# Key/value cache with per-entry expiry, backed by SQLite.
# Expired rows are treated as absent and deleted on read.

from __future__ import annotations

import os
import sqlite3
import time
from typing import Callable, Optional

from seo_agent.errors import CacheError


class TTLCache:
    def __init__(self, db_path: str, clock: Callable[[], float] = time.time):
        self.db_path = db_path
        self.clock = clock
        self._ensure_schema()

    def _conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _ensure_schema(self) -> None:
        os.makedirs(os.path.dirname(os.path.abspath(self.db_path)), exist_ok=True)
        try:
            with self._conn() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv_cache (
                        key        TEXT PRIMARY KEY,
                        value      TEXT NOT NULL,
                        expires_at REAL NOT NULL
                    )
                    """
                )
                conn.commit()
        except sqlite3.Error as e:
            raise CacheError(f"Cannot initialise cache at {self.db_path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        try:
            with self._conn() as conn:
                row = conn.execute("SELECT value, expires_at FROM kv_cache WHERE key = ?", (key,)).fetchone()
                if row is None:
                    return None
                value, expires_at = row
                if expires_at <= self.clock():
                    conn.execute("DELETE FROM kv_cache WHERE key = ?", (key,))
                    conn.commit()
                    return None
                return value
        except sqlite3.Error as e:
            raise CacheError(f"Cache read failed for {key}: {e}") from e

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            with self._conn() as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv_cache (key, value, expires_at) VALUES (?, ?, ?)",
                    (key, value, self.clock() + ttl_seconds),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise CacheError(f"Cache write failed for {key}: {e}") from e
