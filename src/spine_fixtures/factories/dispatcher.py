"""Capability dispatcher: route a clone to its save operation."""

from __future__ import annotations

from typing import Any

from spine_fixtures.core.errors import InvalidStoreError, type_name
from spine_fixtures.core.logging import get_logger

from .capabilities import resolve_capability

logger = get_logger(__name__)


def dispatch(factory: Any, store: Any) -> Any:
    """Save ``factory`` through ``store`` and return the saved result.

    Exceptions raised by the factory's own save operation propagate
    unchanged.

    Raises:
        UnsupportedFactoryError: ``factory`` implements no capability.
        InvalidStoreError: ``store`` lacks the capability's store shape.
    """
    capability = resolve_capability(factory)
    if not capability.accepts(store):
        raise InvalidStoreError(type_name(store))

    logger.debug(
        "factory_dispatched",
        capability=capability.name,
        type=type_name(factory),
        store=type_name(store),
    )
    result = capability.save(factory, store)
    logger.debug("factory_saved", capability=capability.name, result_type=type_name(result))
    return result


__all__ = ["dispatch"]
