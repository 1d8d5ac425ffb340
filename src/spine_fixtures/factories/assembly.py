"""Single-factory API: ``create(name).with_attrs(...).exec(store)``.

An ``Assembly`` lives for one create → overlay → exec chain. It holds a
clone of the prototype (never the prototype itself) and a deferred
assignment into the caller's output target, applied after a successful save.

Examples:
    >>> out = Person()
    >>> create("a_person", out=out).with_attrs({"name": "John", "age": 1}).exec(conn)
    >>> out.name, out.age
    ('John', 1)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import partial
from typing import Any

from .assign import assign
from .clone import clone
from .dispatcher import dispatch
from .overlay import overlay
from .registry import FactoryRegistry, get_registry


class Assembly:
    """Clone of a registered prototype awaiting execution."""

    def __init__(
        self,
        name: str,
        factory: Any,
        assign_result: Callable[[Any], None],
        *,
        strict: bool | None = None,
    ):
        self.name = name
        self.factory = factory
        self._assign = assign_result
        self._strict = strict

    def with_attrs(self, attrs: Mapping[str, Any] | None) -> Assembly:
        """Overwrite fields on the clone before execution.

        Raises:
            UnknownFieldError: A key does not name a declared field.
            TypeMismatchError: A value does not match the field's type.
        """
        overlay(self.factory, attrs, strict=self._strict)
        return self

    def exec(self, store: Any) -> Any:
        """Save the clone through ``store`` and assign the result.

        Returns:
            The value produced by the factory's save operation.

        Raises:
            UnsupportedFactoryError: The clone implements no capability.
            InvalidStoreError: ``store`` lacks the capability's shape.
            AssignmentTypeMismatchError: The result does not fit the output target.
        """
        result = dispatch(self.factory, store)
        self._assign(result)
        return result

    def __repr__(self) -> str:
        return f"Assembly({self.name!r}, {self.factory!r})"


def create(
    name: str,
    attrs: Mapping[str, Any] | None = None,
    out: Any = None,
    *,
    registry: FactoryRegistry | None = None,
    strict: bool | None = None,
    deep: bool | None = None,
) -> Assembly:
    """Clone the prototype bound to ``name`` and apply ``attrs``.

    Args:
        name: Factory name.
        attrs: Optional field overrides, applied before any ``with_attrs``.
        out: Output target (``Ref`` or record instance) or ``None``.
        registry: Registry to use. Defaults to the process-wide registry.
        strict: Overlay type checking; ``None`` uses settings.
        deep: Deep clone; ``None`` uses settings.

    Raises:
        DefinitionNotFoundError: ``name`` is not defined.
        RegistryNotInitializedError: No registry given and none initialized.
    """
    registry = registry if registry is not None else get_registry()
    prototype = registry.lookup(name)

    assembly = Assembly(
        name,
        clone(prototype, deep=deep),
        partial(assign, out),
        strict=strict,
    )
    return assembly.with_attrs(attrs)


__all__ = ["Assembly", "create"]
