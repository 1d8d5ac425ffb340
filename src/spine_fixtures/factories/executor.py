"""Sequential executor: build many factories against one store.

``AutoExecutor`` lets a test populate related rows in a linear script and
check for failure once at the end. The first failure is kept; every
``create`` after it is a no-op, so nothing is saved past the first error.

Examples:
    >>> auto = AutoExecutor(conn)
    >>> auto.create("a_person", out=bob)
    >>> auto.create("a_pet", {"owner_id": bob.id})
    >>> auto.err() is None
    True

    As a context manager the accumulated error is raised on exit::

        with AutoExecutor(conn) as auto:
            auto.create("a_person")
            auto.create("a_pet")
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from spine_fixtures.core.errors import FactoryError
from spine_fixtures.core.logging import LogContext, get_logger

from .assembly import create
from .registry import FactoryRegistry

logger = get_logger(__name__)


class AutoExecutor:
    """Run create → overlay → exec chains in order, stopping at the first error."""

    def __init__(self, store: Any, *, registry: FactoryRegistry | None = None):
        self.store = store
        self.registry = registry
        self.created: list[str] = []
        self._error: Exception | None = None

    @property
    def error(self) -> Exception | None:
        return self._error

    def err(self) -> Exception | None:
        """Return the accumulated error, if any."""
        return self._error

    def create(
        self,
        name: str,
        attrs: Mapping[str, Any] | None = None,
        out: Any = None,
    ) -> None:
        """Create factory ``name`` unless an earlier create failed."""
        if self._error is not None:
            logger.debug("auto_executor_skipped", factory=name)
            return

        with LogContext(factory=name):
            try:
                create(name, attrs, out, registry=self.registry).exec(self.store)
            except Exception as e:
                self._error = e
                if isinstance(e, FactoryError):
                    details = e.to_dict()
                else:
                    details = {"error_type": type(e).__name__, "message": str(e)}
                logger.warning("auto_executor_failed", **details)
                return

        self.created.append(name)

    def raise_for_error(self) -> None:
        """Re-raise the accumulated error, if any."""
        if self._error is not None:
            raise self._error

    def __enter__(self) -> AutoExecutor:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.raise_for_error()


__all__ = ["AutoExecutor"]
