"""SQLite key-value store for the logged-in user record."""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path

from primor_pos.config import DB_PATH, SESSION_KEY
from primor_pos.models import User, UserRole

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _connect(db_path: str | Path | None = None) -> sqlite3.Connection:
    db_file = Path(db_path if db_path is not None else DB_PATH)
    db_file.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(db_file)


def bootstrap_schema(db_path: str | Path | None = None) -> None:
    """Create the key-value table if it does not already exist."""
    with closing(_connect(db_path)) as conn:
        with conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )


def save_current_user(user: User, db_path: str | Path | None = None) -> None:
    """Persist the user record under the session key, replacing any previous one."""
    payload = json.dumps({"id": user.id, "username": user.username, "role": user.role.value, "name": user.name})
    with closing(_connect(db_path)) as conn:
        with conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                (SESSION_KEY, payload, _utc_now_iso()),
            )
    logger.info("session_saved username=%s role=%s", user.username, user.role.value)


def load_current_user(db_path: str | Path | None = None) -> User | None:
    """Return the stored user, or None when absent or unreadable."""
    with closing(_connect(db_path)) as conn:
        row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (SESSION_KEY,)).fetchone()
    if row is None:
        return None

    try:
        raw = json.loads(row[0])
        return User(id=str(raw["id"]), username=str(raw["username"]), role=UserRole(raw["role"]), name=str(raw["name"]))
    except (ValueError, KeyError, TypeError) as exc:
        logger.warning("session_unreadable error=%r", exc)
        return None


def clear_current_user(db_path: str | Path | None = None) -> None:
    with closing(_connect(db_path)) as conn:
        with conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (SESSION_KEY,))
    logger.info("session_cleared")
