"""Local key/value persistence.

Everything the app keeps between runs is a JSON string under a key, the same
way the browser version used local storage.  The quiz engine never touches
this module; callers serialize state and hand it over.
"""
from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


class KeyValueStore(Protocol):
    def save(self, key: str, value: str) -> None:
        ...

    def load(self, key: str) -> str | None:
        ...


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self._init_schema()

    def _init_schema(self) -> None:
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    def save(self, key: str, value: str) -> None:
        self.conn.execute(
            """INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
               ON CONFLICT(key) DO UPDATE SET
                   value = excluded.value,
                   updated_at = excluded.updated_at""",
            (key, value, datetime.now(timezone.utc).isoformat()),
        )
        self.conn.commit()

    def load(self, key: str) -> str | None:
        row = self.conn.execute(
            "SELECT value FROM kv WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else None

    def delete(self, key: str) -> bool:
        cur = self.conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        self.conn.commit()
        return cur.rowcount > 0

    def keys(self, prefix: str = "") -> list[str]:
        """Stored keys starting with *prefix*, oldest update first."""
        escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        rows = self.conn.execute(
            "SELECT key FROM kv WHERE key LIKE ? ESCAPE '\\' ORDER BY updated_at, key",
            (escaped + "%",),
        ).fetchall()
        return [r["key"] for r in rows]
