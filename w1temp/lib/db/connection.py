"""Database connection management.

Provides async database operations using aiosqlite. A run opens one
connection per store path, writes its rows and closes it again:

    async with Database(path, timeout_sec=10.0) as db:
        await db.execute(load_template("insert_w1temp.sql"), (time, id, value))

The timeout is SQLite's busy timeout: while another process holds the
write lock, statements wait up to that long instead of failing with
"database is locked".
"""

from __future__ import annotations

import asyncio
from functools import cache
from pathlib import Path

import aiosqlite

from w1temp.lib.config import get_settings
from w1temp.lib.db.types import SQLParams
from w1temp.lib.exceptions import DatabaseNotConnectedError
from w1temp.logging import get_logger

_logger = get_logger("lib.db")

# SQL templates directory
_SQL_DIR = Path(__file__).resolve().parent.parent / "sql"


@cache
def load_template(name: str) -> str:
    """Load and cache a SQL template file.

    Raises:
        FileNotFoundError: If the template file does not exist, with a message
            indicating the expected location.
    """
    path = _SQL_DIR / name
    if not path.exists():
        raise FileNotFoundError(f"SQL template not found: {path}")
    return path.read_text().strip()


class Database:
    """Async write connection to one SQLite store."""

    def __init__(self, db_path: str, timeout_sec: float | None = None):
        self._db_path = db_path
        self._timeout_sec = (
            timeout_sec
            if timeout_sec is not None
            else get_settings().db_timeout_sec
        )
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database connection, creating the file if needed.

        On failure the connection's worker thread is joined before the error
        propagates, so it never outlives the event loop.
        """
        if self._connection is not None:
            return
        pending = aiosqlite.connect(self._db_path, timeout=self._timeout_sec)
        try:
            self._connection = await pending
        except Exception:
            # aiosqlite queued a stop for its worker without awaiting it
            await asyncio.to_thread(pending._thread.join)
            raise
        _logger.debug("Opened database connection: %s", self._db_path)

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None

    async def __aenter__(self) -> Database:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()

    async def execute(self, sql: str, params: SQLParams = ()) -> int:
        """Execute a SQL statement and commit it.

        Supports both positional (tuple) and named (dict) parameters.

        Returns:
            Number of rows affected by the statement.
        """
        if self._connection is None:
            raise DatabaseNotConnectedError()
        cursor = await self._connection.execute(sql, params)
        await self._connection.commit()
        return cursor.rowcount
