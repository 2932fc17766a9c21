from __future__ import annotations

import json
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from seo_agent.analysis.types import AnalysisResult
from seo_agent.errors import StorageError
from seo_agent.log import get_logger

logger = get_logger("seo_agent.db")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS seo_analyses (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    url             TEXT NOT NULL,
    analysis_data   TEXT NOT NULL,
    score           INTEGER,
    recommendations TEXT,
    created_at      TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS user_sessions (
    session_id  TEXT PRIMARY KEY,
    context     TEXT,
    last_active TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_url ON seo_analyses(url);
CREATE INDEX IF NOT EXISTS idx_created ON seo_analyses(created_at DESC);
"""


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SessionMemory:
    """Latest-turn summary for one chat session. Overwritten on every turn."""
    session_id: str
    context: Dict[str, Any] = field(default_factory=dict)
    last_active: str = ""


class Database:
    """
    SQLite store for analysis history and chat session memory.
    Inserts and single-key reads/upserts only.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open database {self.db_path}: {e}") from e
        try:
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            raise StorageError(f"Database error: {e}") from e
        finally:
            conn.close()

    def init_schema(self) -> None:
        os.makedirs(os.path.dirname(os.path.abspath(self.db_path)), exist_ok=True)
        with self._connect() as conn:
            conn.executescript(_SCHEMA)
            conn.commit()

    # -------------------------
    # Analyses
    # -------------------------
    def save_analysis(self, result: AnalysisResult, created_at: Optional[str] = None) -> int:
        with self._connect() as conn:
            cur = conn.execute(
                """
                INSERT INTO seo_analyses (url, analysis_data, score, recommendations, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    result.url,
                    json.dumps(result.page_features.to_dict(), ensure_ascii=False),
                    result.score,
                    json.dumps([r.to_dict() for r in result.recommendations], ensure_ascii=False),
                    created_at or utc_now_iso(),
                ),
            )
            conn.commit()
            return int(cur.lastrowid)

    def list_recent(self, limit: int = 10) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM seo_analyses ORDER BY created_at DESC, id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [dict(r) for r in rows]

    # -------------------------
    # Sessions
    # -------------------------
    def get_session(self, session_id: str) -> Optional[SessionMemory]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT session_id, context, last_active FROM user_sessions WHERE session_id = ?",
                (session_id,),
            ).fetchone()
        if row is None:
            return None
        context = json.loads(row["context"]) if row["context"] else {}
        return SessionMemory(session_id=row["session_id"], context=context, last_active=row["last_active"])

    def save_session(self, memory: SessionMemory) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO user_sessions (session_id, context, last_active)
                VALUES (?, ?, ?)
                ON CONFLICT(session_id) DO UPDATE SET
                    context=excluded.context,
                    last_active=excluded.last_active
                """,
                (memory.session_id, json.dumps(memory.context, ensure_ascii=False), memory.last_active or utc_now_iso()),
            )
            conn.commit()
        logger.debug("Saved session memory for %s", memory.session_id)
