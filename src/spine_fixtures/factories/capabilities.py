"""Persistence capabilities a factory may implement.

The set is closed and ordered: the dispatcher walks ``CAPABILITIES`` and
picks the first variant the clone implements. Supporting a new kind of
store (a document store, a key-value cache) means adding a ``Capability``
to the tuple with its own factory and store protocols.

Architecture:
    ::

        Capability("sql")
          factory_protocol = SQLFactory   → record.save(conn)
          store_protocol   = Connection   → execute / commit / rollback / close

Tags:
    spine-fixtures, capability, dispatch, protocol
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from spine_fixtures.core.errors import UnsupportedFactoryError, type_name
from spine_fixtures.core.protocols import Connection, SQLFactory


@dataclass(frozen=True)
class Capability:
    """One persistence protocol: which records use it and which stores serve it."""

    name: str
    factory_protocol: type
    store_protocol: type
    save: Callable[[Any, Any], Any]

    def implemented_by(self, factory: Any) -> bool:
        return isinstance(factory, self.factory_protocol)

    def accepts(self, store: Any) -> bool:
        return isinstance(store, self.store_protocol)


def _save_sql(factory: SQLFactory, conn: Connection) -> Any:
    return factory.save(conn)


SQL_SAVABLE = Capability(
    name="sql",
    factory_protocol=SQLFactory,
    store_protocol=Connection,
    save=_save_sql,
)

CAPABILITIES: tuple[Capability, ...] = (SQL_SAVABLE,)


def resolve_capability(factory: Any) -> Capability:
    """Return the capability ``factory`` implements.

    Raises:
        UnsupportedFactoryError: No capability matches.
    """
    for capability in CAPABILITIES:
        if capability.implemented_by(factory):
            return capability
    raise UnsupportedFactoryError(type_name(factory))


__all__ = [
    "Capability",
    "SQL_SAVABLE",
    "CAPABILITIES",
    "resolve_capability",
]
