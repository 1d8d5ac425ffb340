"""Record introspection shared by the clone, overlay and assignment steps.

A *record* is any object with declared data members: dataclass instances,
pydantic models, and plain class instances (``__dict__`` and/or
``__slots__``). Scalars, containers, classes, functions and modules are not
records.

Field writes go through ``write_field`` so frozen dataclasses and pydantic
models can be populated without running their validation hooks; the engine
only ever writes to fresh clones and caller-owned output targets.

Tags:
    spine-fixtures, records, introspection, dataclasses, pydantic
"""

from __future__ import annotations

import dataclasses
import inspect
import sys
import types
import typing
from collections.abc import Iterator
from functools import lru_cache
from typing import Any

from pydantic import BaseModel

_NOT_RECORDS = (
    str, bytes, bytearray, int, float, complex, bool,
    list, tuple, dict, set, frozenset, range, memoryview,
)

_MISSING = object()


def is_record(value: Any) -> bool:
    """Whether ``value`` is an instance with declared data members."""
    if value is None or isinstance(value, type) or isinstance(value, _NOT_RECORDS):
        return False
    if dataclasses.is_dataclass(value) or isinstance(value, BaseModel):
        return True
    if inspect.isroutine(value) or inspect.ismodule(value):
        return False
    return hasattr(value, "__dict__") or bool(_slot_names(type(value)))


def _slot_names(cls: type) -> tuple[str, ...]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot not in ("__dict__", "__weakref__") and slot not in names:
                names.append(slot)
    return tuple(names)


def field_names(record: Any) -> list[str]:
    """Declared data member names of ``record``, in declaration order."""
    if isinstance(record, BaseModel):
        return list(type(record).model_fields)
    if dataclasses.is_dataclass(record):
        return [f.name for f in dataclasses.fields(record)]

    names = [name for name in _slot_names(type(record)) if hasattr(record, name)]
    for name in getattr(record, "__dict__", {}):
        if name not in names:
            names.append(name)
    return names


def declared_names(record: Any) -> set[str]:
    """Names an overlay may target: data members plus annotated attributes."""
    names = set(field_names(record))
    if not dataclasses.is_dataclass(record) and not isinstance(record, BaseModel):
        for name, hint in _raw_annotations(type(record)).items():
            if not _is_classvar(hint):
                names.add(name)
    return names


def iter_fields(record: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(name, value)`` for every data member that holds a value."""
    for name in field_names(record):
        value = getattr(record, name, _MISSING)
        if value is not _MISSING:
            yield name, value


def write_field(record: Any, name: str, value: Any) -> None:
    """Set ``record.name = value`` bypassing frozen/validating ``__setattr__``."""
    if isinstance(record, BaseModel):
        record.__dict__[name] = value
        record.__pydantic_fields_set__.add(name)
        return
    object.__setattr__(record, name, value)


def field_type(cls: type, name: str) -> Any:
    """Declared type annotation of ``cls.name``; ``Any`` when unknown."""
    if issubclass(cls, BaseModel):
        info = cls.model_fields.get(name)
        return info.annotation if info is not None else Any
    return _type_hints(cls).get(name, Any)


@lru_cache(maxsize=512)
def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except Exception:
        return _resolve_each(cls)


def _resolve_each(cls: type) -> dict[str, Any]:
    # one unresolvable annotation must not disable checks on its siblings
    hints: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        module = sys.modules.get(klass.__module__)
        globalns = dict(getattr(module, "__dict__", {}))
        localns = dict(vars(klass))
        for name, hint in inspect.get_annotations(klass).items():
            hints[name] = _resolve_hint(name, hint, globalns, localns)
    return hints


def _resolve_hint(name: str, hint: Any, globalns: dict, localns: dict) -> Any:
    holder = type("_Hint", (), {"__annotations__": {name: hint}})
    try:
        return typing.get_type_hints(holder, globalns, localns)[name]
    except Exception:
        return Any


def _raw_annotations(cls: type) -> dict[str, Any]:
    annotations: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        annotations.update(inspect.get_annotations(klass))
    return annotations


def _is_classvar(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    return typing.get_origin(hint) is typing.ClassVar or hint is typing.ClassVar


def matches_type(value: Any, hint: Any) -> bool:
    """Whether ``value`` is acceptable for a field annotated ``hint``.

    Parameterised generics are checked by origin only (``list[int]`` accepts
    any list). Unresolvable hints accept anything.
    """
    if hint is Any or isinstance(hint, (str, typing.ForwardRef, typing.TypeVar)):
        return True
    if hint is None or hint is type(None):
        return value is None

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if origin is typing.Union or origin is types.UnionType:
        return any(matches_type(value, arg) for arg in args)
    if origin is typing.Literal:
        return value in args
    if origin in (typing.ClassVar, typing.Final, typing.Annotated):
        return matches_type(value, args[0]) if args else True
    if origin is not None:
        hint = origin

    if not isinstance(hint, type):
        return True
    if isinstance(value, bool) and hint in (int, float, complex):
        return False
    if hint is float:
        return isinstance(value, (int, float))
    if hint is complex:
        return isinstance(value, (int, float, complex))
    try:
        return isinstance(value, hint)
    except TypeError:
        # non runtime-checkable protocols and similar
        return True


def describe_type(hint: Any) -> str:
    """Readable name for a type annotation."""
    if isinstance(hint, type) and typing.get_origin(hint) is None:
        return hint.__qualname__
    return str(hint).replace("typing.", "")
