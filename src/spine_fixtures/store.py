"""SQLite store helpers for factory-backed tests.

``sqlite3.Connection`` already satisfies :class:`Connection`, so these are
conveniences only: opening a connection configured the way the engine's
tests expect, and emptying tables between tests.
"""

from __future__ import annotations

import sqlite3

from spine_fixtures.core.errors import StoreConnectionError
from spine_fixtures.core.logging import get_logger
from spine_fixtures.core.protocols import Connection

logger = get_logger(__name__)


def connect_sqlite(path: str = ":memory:", *, timeout: float = 5.0) -> sqlite3.Connection:
    """Open a SQLite connection with ``sqlite3.Row`` rows and foreign keys on."""
    uri = path.startswith("file:") or "?" in path

    try:
        conn = sqlite3.connect(
            path,
            timeout=timeout,
            check_same_thread=False,
            uri=uri,
        )
    except sqlite3.Error as e:
        raise StoreConnectionError(
            f"Failed to connect to SQLite: {e}",
            cause=e,
        ) from e

    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def truncate(conn: Connection, *tables: str) -> None:
    """Delete every row from ``tables`` and commit."""
    if not tables:
        return

    for table in tables:
        conn.execute(f"DELETE FROM {table}")
    conn.commit()
    logger.debug("store_truncated", tables=list(tables))


__all__ = [
    "Connection",
    "connect_sqlite",
    "truncate",
]
