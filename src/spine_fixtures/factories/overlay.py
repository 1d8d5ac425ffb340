"""Attribute overlay: overwrite named fields on a clone.

``Attrs`` keys must name declared fields of the clone's type. Every pair is
validated before any field is written, so a rejected overlay leaves the
clone exactly as it was.

Tags:
    spine-fixtures, overlay, attrs, type-checking
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from spine_fixtures.core.errors import TypeMismatchError, UnknownFieldError, type_name
from spine_fixtures.core.logging import get_logger

from .records import declared_names, describe_type, field_type, matches_type, write_field

logger = get_logger(__name__)

Attrs = dict[str, Any]
"""Field name → replacement value."""

R = TypeVar("R")


def overlay(target: R, attrs: Mapping[str, Any] | None, *, strict: bool | None = None) -> R:
    """Write ``attrs`` onto ``target`` by field name and return it.

    Args:
        target: Clone to mutate in place.
        attrs: Field values to set. ``None`` or empty is a no-op.
        strict: Check values against declared annotations. ``None`` uses
            ``FactorySettings.strict_types``.

    Raises:
        UnknownFieldError: A key does not name a declared field.
        TypeMismatchError: A value does not match the field's annotation.
    """
    if not attrs:
        return target

    if strict is None:
        from spine_fixtures.core.settings import get_settings

        strict = get_settings().strict_types

    cls = type(target)
    declared = declared_names(target)
    for name, value in attrs.items():
        if name not in declared:
            raise UnknownFieldError(type_name(cls), name)
        if strict:
            hint = field_type(cls, name)
            if not matches_type(value, hint):
                raise TypeMismatchError(
                    type_name(cls),
                    name,
                    describe_type(hint),
                    type_name(value),
                )

    for name, value in attrs.items():
        write_field(target, name, value)

    logger.debug("factory_overlay_applied", type=type_name(cls), fields=sorted(attrs))
    return target


__all__ = ["Attrs", "overlay"]
