"""
spine-fixtures - named prototype factories for test setup.

Define a prototype once, then build independent, optionally overridden
copies of it that are saved through a store and written back into
caller-owned objects:

    >>> from spine_fixtures import init_registry, define, create
    >>> init_registry()
    >>> define("a_person", Person(name="Bob", age=15))
    >>> out = Person()
    >>> create("a_person", {"name": "John"}, out).exec(conn)

Packages:
- spine_fixtures.core: errors, logging, protocols, settings
- spine_fixtures.factories: registry, clone, overlay, dispatch, executors
- spine_fixtures.store: SQLite helpers
- spine_fixtures.testing: pytest adapter and fixtures
"""

__version__ = "0.1.0"

from spine_fixtures.core.errors import (
    AlreadyInitializedError,
    AssignmentTypeMismatchError,
    DefinitionNotFoundError,
    FactoryError,
    InvalidPrototypeError,
    InvalidStoreError,
    RedefinitionError,
    RegistryNotInitializedError,
    TypeMismatchError,
    UnknownFieldError,
    UnsupportedFactoryError,
)
from spine_fixtures.core.protocols import Connection, SQLFactory
from spine_fixtures.factories import (
    Assembly,
    Attrs,
    AutoExecutor,
    FactoryRegistry,
    Ref,
    assign,
    clone,
    create,
    define,
    dispatch,
    get_registry,
    init_registry,
    lookup,
    overlay,
    reset_registry,
)

__all__ = [
    "__version__",
    # errors
    "AlreadyInitializedError",
    "AssignmentTypeMismatchError",
    "DefinitionNotFoundError",
    "FactoryError",
    "InvalidPrototypeError",
    "InvalidStoreError",
    "RedefinitionError",
    "RegistryNotInitializedError",
    "TypeMismatchError",
    "UnknownFieldError",
    "UnsupportedFactoryError",
    # protocols
    "Connection",
    "SQLFactory",
    # factories
    "Assembly",
    "Attrs",
    "AutoExecutor",
    "FactoryRegistry",
    "Ref",
    "assign",
    "clone",
    "create",
    "define",
    "dispatch",
    "get_registry",
    "init_registry",
    "lookup",
    "overlay",
    "reset_registry",
]
