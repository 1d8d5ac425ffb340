"""Result assignment: copy a saved result into a caller-owned output target.

Two kinds of output target are supported:

- a :class:`Ref` holder, whose ``value`` is replaced by the result;
- an existing record instance, whose fields are overwritten in place with the
  result's fields, so references the caller already holds see the
  persisted values (generated ids included).

Examples:
    >>> out = Person()
    >>> create("a_person", out=out).exec(conn)
    >>> out.id is not None
    True

    >>> ref = Ref()
    >>> create("a_person", out=ref).exec(conn)
    >>> ref.value.name
    'Bob'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from spine_fixtures.core.errors import AssignmentTypeMismatchError, type_name

from .records import field_names, iter_fields, write_field

T = TypeVar("T")


@dataclass
class Ref(Generic[T]):
    """Mutable holder used as an output target."""

    value: T | None = None


def assign(target: Any, result: Any) -> None:
    """Copy ``result`` into ``target``.

    A ``None`` result (nothing produced) or ``None`` target (caller does not
    want the value) is a no-op.

    Raises:
        AssignmentTypeMismatchError: ``result`` is not an instance of the
            target's class.
    """
    if result is None or target is None:
        return

    if isinstance(target, Ref):
        target.value = result
        return

    if not isinstance(result, type(target)):
        raise AssignmentTypeMismatchError(type_name(target), type_name(result))

    if type(result) is type(target):
        values = dict(iter_fields(result))
    else:
        values = {name: getattr(result, name) for name in field_names(target)}
    for name, value in values.items():
        write_field(target, name, value)


__all__ = ["Ref", "assign"]
