"""Factory registry for defining and looking up named prototypes.

Manifesto:
    Test setup reads best when every row a test needs is described once, by
    name, and built on demand. The registry binds names to prototypes with
    insert-once semantics: a name can never be silently rebound, and a
    prototype is never mutated by the factories built from it.

Architecture:
    ::

        FactoryRegistry            explicit object, own lock
          define(name, prototype)  → RedefinitionError on rebind
          lookup(name)             → DefinitionNotFoundError when absent
          create(name, attrs, out) → Assembly

        process-wide default (optional)
          init_registry()  → AlreadyInitializedError when called twice
          get_registry()   → RegistryNotInitializedError before init
          reset_registry() → discard unconditionally

Tags:
    spine-fixtures, registry, prototype, lookup

Doc-Types:
    api-reference
"""

from __future__ import annotations

import threading
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any, TypeVar

from spine_fixtures.core.errors import (
    AlreadyInitializedError,
    DefinitionNotFoundError,
    InvalidPrototypeError,
    RedefinitionError,
    RegistryNotInitializedError,
    type_name,
)
from spine_fixtures.core.logging import get_logger

from .records import is_record

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .assembly import Assembly

logger = get_logger(__name__)

R = TypeVar("R")


class FactoryRegistry:
    """Mapping of factory name → prototype record.

    Args:
        entries: Optional mapping to use as backing storage. It is adopted,
            not copied, so definitions are visible through it.
    """

    def __init__(self, entries: MutableMapping[str, Any] | None = None):
        self._entries: MutableMapping[str, Any] = entries if entries is not None else {}
        self._lock = threading.RLock()

    def define(self, name: str, prototype: R) -> R:
        """Bind ``name`` to ``prototype`` and return the prototype.

        Raises:
            RedefinitionError: ``name`` is already bound. The first binding stays.
            InvalidPrototypeError: ``prototype`` is not a record.
        """
        if not is_record(prototype):
            raise InvalidPrototypeError(type_name(prototype))

        with self._lock:
            if name in self._entries:
                raise RedefinitionError(name, prototype)
            self._entries[name] = prototype

        logger.debug("factory_defined", name=name, type=type_name(prototype))
        return prototype

    def lookup(self, name: str) -> Any:
        """Return the prototype bound to ``name``.

        Raises:
            DefinitionNotFoundError: Nothing is bound under ``name``.
        """
        with self._lock:
            try:
                return self._entries[name]
            except KeyError:
                raise DefinitionNotFoundError(name) from None

    def create(
        self,
        name: str,
        attrs: Mapping[str, Any] | None = None,
        out: Any = None,
        **options: Any,
    ) -> Assembly:
        """Start an assembly for ``name`` on this registry."""
        from .assembly import create

        return create(name, attrs, out, registry=self, **options)

    def names(self) -> list[str]:
        """List all defined factory names."""
        with self._lock:
            return sorted(self._entries)

    def clear(self) -> None:
        """Remove every definition (for testing)."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"FactoryRegistry({self.names()!r})"


# Process-wide default registry
_registry: FactoryRegistry | None = None
_registry_lock = threading.Lock()


def init_registry(entries: MutableMapping[str, Any] | None = None) -> FactoryRegistry:
    """Create the process-wide registry.

    Raises:
        AlreadyInitializedError: It already exists.
    """
    global _registry
    with _registry_lock:
        if _registry is not None:
            raise AlreadyInitializedError()
        _registry = FactoryRegistry(entries)
    logger.debug("factory_registry_initialized", adopted=entries is not None)
    return _registry


def reset_registry() -> None:
    """Discard the process-wide registry."""
    global _registry
    with _registry_lock:
        _registry = None
    logger.debug("factory_registry_reset")


def get_registry() -> FactoryRegistry:
    """Return the process-wide registry.

    Raises:
        RegistryNotInitializedError: ``init_registry()`` has not been called.
    """
    registry = _registry
    if registry is None:
        raise RegistryNotInitializedError()
    return registry


def define(name: str, prototype: R) -> R:
    """Define a factory on the process-wide registry.

    ::

        person = define("a_person", Person(name="Bob", age=18))
    """
    return get_registry().define(name, prototype)


def lookup(name: str) -> Any:
    """Look up a prototype on the process-wide registry."""
    return get_registry().lookup(name)


__all__ = [
    "FactoryRegistry",
    "init_registry",
    "reset_registry",
    "get_registry",
    "define",
    "lookup",
]
