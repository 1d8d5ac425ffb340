"""spine-fixtures core: errors, logging, protocols, settings.

Modules
-------
errors      FactoryError hierarchy with stable messages
logging     structlog configuration and LogContext
protocols   Connection and SQLFactory structural protocols
settings    FactorySettings (pydantic-settings, SPINE_FIXTURES_*)
"""

from spine_fixtures.core.errors import (
    AlreadyInitializedError,
    AssignmentTypeMismatchError,
    DefinitionNotFoundError,
    ErrorCategory,
    ErrorContext,
    FactoryError,
    InvalidPrototypeError,
    InvalidStoreError,
    RedefinitionError,
    RegistryNotInitializedError,
    StoreConnectionError,
    TypeMismatchError,
    UnknownFieldError,
    UnsupportedFactoryError,
)
from spine_fixtures.core.protocols import Connection, SQLFactory

__all__ = [
    "AlreadyInitializedError",
    "AssignmentTypeMismatchError",
    "Connection",
    "DefinitionNotFoundError",
    "ErrorCategory",
    "ErrorContext",
    "FactoryError",
    "InvalidPrototypeError",
    "InvalidStoreError",
    "RedefinitionError",
    "RegistryNotInitializedError",
    "SQLFactory",
    "StoreConnectionError",
    "TypeMismatchError",
    "UnknownFieldError",
    "UnsupportedFactoryError",
]
