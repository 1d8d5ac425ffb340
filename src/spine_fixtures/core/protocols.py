"""
Protocol definitions for spine-fixtures.

Protocols describe the shapes the factory engine dispatches on: what a store
handle must expose and what a record must implement to be persisted. Both are
structural, so user record types never inherit from library classes.

Architecture:
    ::

        protocols.py
        ├── Connection   : store shape for SQL persistence (sqlite3, psycopg, ...)
        └── SQLFactory   : record that can save itself through a Connection

Guardrails:
    ❌ DON'T: Subclass these protocols to mark a record as savable
    ✅ DO: Implement ``save(conn)`` on the record; the shape is enough

Tags:
    protocol, connection, capability, spine-fixtures, contracts

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Connection(Protocol):
    """
    Minimal synchronous DB-API style connection.

    ``sqlite3.Connection`` satisfies it natively, as do psycopg connections.
    Statements are prepared and executed through ``execute``.

    Examples:
        >>> import sqlite3
        >>> isinstance(sqlite3.connect(":memory:"), Connection)
        True
    """

    def execute(self, sql: str, params: Any = ()) -> Any:
        """Execute a single statement."""
        ...

    def executemany(self, sql: str, params: Any) -> Any:
        """Execute a statement for multiple parameter sets."""
        ...

    def commit(self) -> None:
        """Commit current transaction."""
        ...

    def rollback(self) -> None:
        """Rollback current transaction."""
        ...

    def close(self) -> None:
        """Release the connection."""
        ...


@runtime_checkable
class SQLFactory(Protocol):
    """
    A record that persists itself through a :class:`Connection`.

    ``save`` returns the persisted value (usually ``self`` with generated
    columns filled in) or ``None`` when nothing should be assigned back.

    Examples:
        >>> @dataclass
        ... class Person:
        ...     id: int | None = None
        ...     name: str = ""
        ...
        ...     def save(self, conn):
        ...         cur = conn.execute("INSERT INTO person (name) VALUES (?)", (self.name,))
        ...         self.id = cur.lastrowid
        ...         return self
    """

    def save(self, conn: Connection) -> Any:
        """Persist the record and return the stored value."""
        ...


__all__ = [
    "Connection",
    "SQLFactory",
]
