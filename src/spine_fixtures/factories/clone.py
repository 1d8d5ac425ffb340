"""Clone engine: independent copies of registered prototypes.

A clone is a fresh instance of the prototype's concrete class with every
declared field's current value copied across. The copy is memberwise (one
level deep): a field holding a list shares that list with the prototype
unless ``deep=True`` is requested. ``__init__`` is not run, so
``__post_init__`` side effects and required constructor arguments do not
interfere with cloning.

Examples:
    >>> prototype = Person(name="Bob", age=15)
    >>> copy_ = clone(prototype)
    >>> copy_ == prototype, copy_ is prototype
    (True, False)

Tags:
    spine-fixtures, clone, prototype, memberwise-copy
"""

from __future__ import annotations

import copy
from typing import Any, TypeVar

from pydantic import BaseModel

from spine_fixtures.core.errors import InvalidPrototypeError, type_name
from spine_fixtures.core.logging import get_logger

from .records import is_record, iter_fields, write_field

logger = get_logger(__name__)

R = TypeVar("R")


def clone(prototype: R, *, deep: bool | None = None) -> R:
    """Return a freshly allocated copy of ``prototype``.

    Args:
        prototype: Record to copy. Never modified.
        deep: Deep copy field values. ``None`` uses ``FactorySettings.deep_clone``.

    Raises:
        InvalidPrototypeError: ``prototype`` is not a record.
    """
    if not is_record(prototype):
        raise InvalidPrototypeError(type_name(prototype))

    if deep is None:
        from spine_fixtures.core.settings import get_settings

        deep = get_settings().deep_clone

    if isinstance(prototype, BaseModel):
        new = prototype.model_copy(deep=deep)
    else:
        cls = type(prototype)
        new = cls.__new__(cls)
        for name, value in iter_fields(prototype):
            write_field(new, name, copy.deepcopy(value) if deep else value)

    logger.debug("factory_cloned", type=type_name(prototype), deep=deep)
    return new


__all__ = ["clone"]
