"""
SQLite persistence for the chat room.

This module provides the ``Store`` class: a single SQLite connection
shared by every service, with the two collections of the chat room
(``participants`` and ``messages``) created on ``open``.  The
connection is opened by the application entry point and handed to the
services through their constructors; nothing in this module keeps a
global handle.

The connection is an ``aiosqlite`` connection: every statement runs on
its worker thread and only the awaiting task is suspended, so request
handlers and the presence sweeper keep running while a query is in
flight.  Services await store calls one after another.  No transaction
spans more than one call.  Any ``sqlite3.Error`` (and an integer too
large to bind) is wrapped in ``StoreError`` at this boundary.
"""

import logging
import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import aiosqlite

from .config import settings
from .errors import StoreError


logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS participants (
    name TEXT PRIMARY KEY,
    last_status INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS messages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    from_user TEXT NOT NULL,
    to_user TEXT NOT NULL,
    text TEXT NOT NULL,
    type TEXT NOT NULL,
    time TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_participants_last_status ON participants(last_status);
"""


class DuplicateKeyError(StoreError):
    """An insert violated a uniqueness constraint."""


@dataclass
class WriteResult:
    """Outcome of a single write statement."""

    rowcount: int
    lastrowid: Optional[int]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    ``:memory:`` and absolute paths are used as is.  Relative paths are
    resolved against the project root.
    """
    db_url = database_url or settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


class Store:
    """Shared connection to the chat room database."""

    def __init__(self, database_url: Optional[str] = None) -> None:
        self.path = get_database_path(database_url)
        self._conn: Optional[aiosqlite.Connection] = None

    @property
    def available(self) -> bool:
        return self._conn is not None

    async def open(self) -> None:
        """Connect and create the collections if they do not exist.

        Raises ``StoreError`` if the database cannot be opened; the
        caller decides whether that is fatal.
        """
        if self._conn is not None:
            return
        try:
            conn = await aiosqlite.connect(self.path)
        except sqlite3.Error as exc:
            raise StoreError(f"Could not open database {self.path}: {exc}") from exc
        try:
            conn.row_factory = aiosqlite.Row
            await conn.executescript(SCHEMA)
            await conn.commit()
        except sqlite3.Error as exc:
            await conn.close()
            raise StoreError(f"Could not open database {self.path}: {exc}") from exc
        self._conn = conn
        logger.info("Store opened at %s", self.path)

    async def close(self) -> None:
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()
        logger.info("Store closed")

    def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StoreError("Store is not connected")
        return self._conn

    async def fetchall(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Run a query and return every row as a dictionary."""
        conn = self._connection()
        try:
            async with conn.execute(sql, params) as cursor:
                rows = await cursor.fetchall()
        except (sqlite3.Error, OverflowError) as exc:
            logger.error("Query failed: %s", exc)
            raise StoreError(str(exc)) from exc
        return [dict(row) for row in rows]

    async def fetchone(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        """Run a query and return the first row, or ``None``."""
        conn = self._connection()
        try:
            async with conn.execute(sql, params) as cursor:
                row = await cursor.fetchone()
        except (sqlite3.Error, OverflowError) as exc:
            logger.error("Query failed: %s", exc)
            raise StoreError(str(exc)) from exc
        return dict(row) if row else None

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> WriteResult:
        """Run a single write statement and commit it.

        Returns the affected row count and the id of the inserted row.
        """
        conn = self._connection()
        try:
            async with conn.execute(sql, params) as cursor:
                result = WriteResult(rowcount=cursor.rowcount, lastrowid=cursor.lastrowid)
            await conn.commit()
        except sqlite3.IntegrityError as exc:
            await conn.rollback()
            raise DuplicateKeyError(str(exc)) from exc
        except (sqlite3.Error, OverflowError) as exc:
            await conn.rollback()
            logger.error("Write failed: %s", exc)
            raise StoreError(str(exc)) from exc
        return result
