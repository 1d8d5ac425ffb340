"""
Structured error types for spine-fixtures.

Every failure the factory engine can report is a typed exception rooted at
``FactoryError``. Errors carry a category, a structured context and an
optional chained cause so a failing test setup can be reported with enough
detail to find the offending factory.

Manifesto:
    - **Typed Error Hierarchy:** One class per failure mode
    - **Stable Messages:** Message formats are part of the public contract
    - **Rich Context:** Errors carry the factory name and types involved
    - **No Aborts:** Every failure is a raised exception, never a hard exit

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       FactoryError                               │
        │  (category, context, cause)                                      │
        ├─────────────────────────────────────────────────────────────────┤
        │  REGISTRY               VALIDATION           DISPATCH            │
        │  AlreadyInitialized     UnknownField         UnsupportedFactory  │
        │  RegistryNotInitialized TypeMismatch         InvalidStore        │
        │  Redefinition                                                    │
        │  DefinitionNotFound     ASSIGNMENT           INTERNAL            │
        │                         AssignmentTypeMismatch InvalidPrototype  │
        │                                                                  │
        │  STORE                                                           │
        │  StoreConnectionError                                            │
        └─────────────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Wrap errors raised by a factory's own save operation
    ✅ DO: Let them propagate verbatim to the caller

    ❌ DON'T: Reword the registry/dispatch messages
    ✅ DO: Keep them byte-for-byte stable, tests compare them exactly

Tags:
    error-handling, exception-hierarchy, error-context, spine-fixtures

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and reporting."""

    REGISTRY = "REGISTRY"         # Definition lifecycle, lookups
    VALIDATION = "VALIDATION"     # Overlay field names and types
    DISPATCH = "DISPATCH"         # Capability and store resolution
    ASSIGNMENT = "ASSIGNMENT"     # Copying results into output targets
    STORE = "STORE"               # Store connection setup
    INTERNAL = "INTERNAL"         # Programmer errors, corrupt state


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Attributes:
        factory: Name of the factory being built
        field_name: Field name involved (overlay errors)
        expected_type: Declared type involved in a mismatch
        actual_type: Runtime type involved in a mismatch
        metadata: Additional key-value pairs
    """

    factory: str | None = None
    field_name: str | None = None
    expected_type: str | None = None
    actual_type: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["factory", "field_name", "expected_type", "actual_type"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class FactoryError(Exception):
    """
    Base exception for all spine-fixtures errors.

    Subclasses set ``default_category``. The message is stored verbatim so
    ``str(error)`` is exactly the documented message format.

    Examples:
        >>> error = FactoryError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> error = RedefinitionError("a_person", 42)
        >>> str(error)
        'Redefinition of a_person: 42'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def with_context(self, **kwargs: Any) -> FactoryError:
        """
        Add context to this error (fluent API).

        Usage:
            raise UnknownFieldError("Person", "nickname").with_context(factory="a_person")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# REGISTRY ERRORS
# =============================================================================


class RegistryError(FactoryError):
    """Base class for definition lifecycle errors."""

    default_category = ErrorCategory.REGISTRY


class AlreadyInitializedError(RegistryError):
    """The process-wide registry was initialized twice."""

    def __init__(self, message: str = "Context is not nil", **kwargs: Any):
        super().__init__(message, **kwargs)


class RegistryNotInitializedError(RegistryError):
    """The process-wide registry was used before ``init_registry()``."""

    def __init__(
        self,
        message: str = "Context is nil, call init_registry() first",
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)


class RedefinitionError(RegistryError):
    """A factory name was bound twice."""

    def __init__(self, name: str, value: Any, **kwargs: Any):
        super().__init__(f"Redefinition of {name}: {value!r}", **kwargs)
        self.name = name
        self.value = value
        self.context.factory = name


class DefinitionNotFoundError(RegistryError, KeyError):
    """No factory is bound under the requested name."""

    def __init__(self, name: str, **kwargs: Any):
        super().__init__(f"Definition not found: {name}", **kwargs)
        self.name = name
        self.context.factory = name


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class OverlayError(FactoryError):
    """Base class for attribute overlay failures."""

    default_category = ErrorCategory.VALIDATION


class UnknownFieldError(OverlayError, AttributeError):
    """An overlay key does not name a declared field."""

    def __init__(self, type_name: str, field_name: str, **kwargs: Any):
        super().__init__(f"Unknown field {field_name} on {type_name}", **kwargs)
        self.field_name = field_name
        self.context.field_name = field_name
        self.context.expected_type = type_name


class TypeMismatchError(OverlayError, TypeError):
    """An overlay value is incompatible with the field's declared type."""

    def __init__(
        self,
        type_name: str,
        field_name: str,
        expected: str,
        actual: str,
        **kwargs: Any,
    ):
        super().__init__(
            f"Type mismatch for {type_name}.{field_name}: expected {expected}, got {actual}",
            **kwargs,
        )
        self.field_name = field_name
        self.context.field_name = field_name
        self.context.expected_type = expected
        self.context.actual_type = actual


# =============================================================================
# DISPATCH ERRORS
# =============================================================================


class DispatchError(FactoryError):
    """Base class for capability resolution failures."""

    default_category = ErrorCategory.DISPATCH


class UnsupportedFactoryError(DispatchError):
    """The clone implements no known persistence capability."""

    def __init__(self, type_name: str, **kwargs: Any):
        super().__init__(f"Invalid Factory Interface: {type_name}", **kwargs)
        self.context.actual_type = type_name


class InvalidStoreError(DispatchError):
    """The store handle lacks the shape the capability requires."""

    def __init__(self, type_name: str, **kwargs: Any):
        super().__init__(f"Invalid Store Interface: {type_name}", **kwargs)
        self.context.actual_type = type_name


# =============================================================================
# ASSIGNMENT / INTERNAL / STORE ERRORS
# =============================================================================


class AssignmentTypeMismatchError(FactoryError, TypeError):
    """The saved result cannot be copied into the output target."""

    default_category = ErrorCategory.ASSIGNMENT

    def __init__(self, target_type: str, result_type: str, **kwargs: Any):
        super().__init__(
            f"Cannot assign {result_type} to {target_type}",
            **kwargs,
        )
        self.context.expected_type = target_type
        self.context.actual_type = result_type


class InvalidPrototypeError(FactoryError, TypeError):
    """A value that is not a record was handed to the clone engine."""

    default_category = ErrorCategory.INTERNAL

    def __init__(self, type_name: str, **kwargs: Any):
        super().__init__(f"Invalid Prototype: {type_name} is not a record type", **kwargs)
        self.context.actual_type = type_name


class StoreConnectionError(FactoryError):
    """Opening a store connection failed."""

    default_category = ErrorCategory.STORE


def type_name(value: Any) -> str:
    """Fully qualified class name of ``value``, used in error messages."""
    cls = value if isinstance(value, type) else type(value)
    module = cls.__module__
    if module in ("builtins", None):
        return cls.__qualname__
    return f"{module}.{cls.__qualname__}"


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "FactoryError",
    "RegistryError",
    "AlreadyInitializedError",
    "RegistryNotInitializedError",
    "RedefinitionError",
    "DefinitionNotFoundError",
    "OverlayError",
    "UnknownFieldError",
    "TypeMismatchError",
    "DispatchError",
    "UnsupportedFactoryError",
    "InvalidStoreError",
    "AssignmentTypeMismatchError",
    "InvalidPrototypeError",
    "StoreConnectionError",
    "type_name",
]
