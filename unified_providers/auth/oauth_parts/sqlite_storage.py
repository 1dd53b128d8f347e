"""SQLite-backed token storage.

Purpose
-------
Persist OAuth tokens across processes for local tools and CLIs.

External dependencies
---------------------
- Standard library only (``sqlite3``). Blocking calls run in a worker thread
  via ``asyncio.to_thread`` so the event loop is never blocked.

Reliability
-----------
- Applies journal mode, synchronous mode and ``busy_timeout`` from
  ``unified_providers.config.defaults``.
- One connection per call; the store keeps no open handles.
"""
from __future__ import annotations

import asyncio
import json
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Optional

from ...config.defaults import SQLITE_BUSY_TIMEOUT_MS, SQLITE_JOURNAL_MODE, SQLITE_SYNCHRONOUS
from .token import OAuthToken

_SCHEMA = """
CREATE TABLE IF NOT EXISTS oauth_tokens (
    provider TEXT PRIMARY KEY,
    access_token TEXT NOT NULL,
    refresh_token TEXT,
    expires_at INTEGER,
    token_type TEXT NOT NULL,
    scopes TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


class SqliteTokenStorage:
    """``TokenStorage`` persisting one row per provider in ``oauth_tokens``.

    Parameters
    ----------
    db_path:
        Database file; ``~`` is expanded and the parent directory is created.
    """

    def __init__(self, db_path: str) -> None:
        self._path = Path(db_path).expanduser()
        self._initialized = False

    def _connect(self) -> sqlite3.Connection:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self._path))
        conn.row_factory = sqlite3.Row
        conn.execute(f"PRAGMA journal_mode={SQLITE_JOURNAL_MODE};")
        conn.execute(f"PRAGMA synchronous={SQLITE_SYNCHRONOUS};")
        conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")
        if not self._initialized:
            conn.execute(_SCHEMA)
            conn.commit()
            self._initialized = True
        return conn

    # ----- Blocking implementations -----
    def _store(self, provider: str, token: OAuthToken) -> None:
        with closing(self._connect()) as conn:
            conn.execute(
                """
                INSERT INTO oauth_tokens(provider, access_token, refresh_token, expires_at, token_type, scopes)
                VALUES(?, ?, ?, ?, ?, ?)
                ON CONFLICT(provider) DO UPDATE SET
                    access_token=excluded.access_token,
                    refresh_token=excluded.refresh_token,
                    expires_at=excluded.expires_at,
                    token_type=excluded.token_type,
                    scopes=excluded.scopes,
                    updated_at=CURRENT_TIMESTAMP
                """,
                (
                    provider,
                    token.access_token,
                    token.refresh_token,
                    token.expires_at,
                    token.token_type,
                    json.dumps(token.scopes),
                ),
            )
            conn.commit()

    def _get(self, provider: str) -> Optional[OAuthToken]:
        with closing(self._connect()) as conn:
            row = conn.execute(
                "SELECT access_token, refresh_token, expires_at, token_type, scopes FROM oauth_tokens WHERE provider = ?",
                (provider,),
            ).fetchone()
        if row is None:
            return None
        return OAuthToken(
            access_token=row["access_token"],
            refresh_token=row["refresh_token"],
            expires_at=row["expires_at"],
            token_type=row["token_type"],
            scopes=json.loads(row["scopes"] or "[]"),
        )

    def _remove(self, provider: str) -> None:
        with closing(self._connect()) as conn:
            conn.execute("DELETE FROM oauth_tokens WHERE provider = ?", (provider,))
            conn.commit()

    # ----- TokenStorage -----
    async def store_tokens(self, provider: str, token: OAuthToken) -> None:
        await asyncio.to_thread(self._store, provider, token)

    async def get_tokens(self, provider: str) -> Optional[OAuthToken]:
        return await asyncio.to_thread(self._get, provider)

    async def remove_tokens(self, provider: str) -> None:
        await asyncio.to_thread(self._remove, provider)

    async def has_tokens(self, provider: str) -> bool:
        return await self.get_tokens(provider) is not None


__all__ = ["SqliteTokenStorage"]
