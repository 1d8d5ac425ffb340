"""Test harness: pytest glue for factory-backed tests.

Manifesto:
The engine itself never aborts a test: every failure is an exception. This
module is the thin adapter at the test boundary that turns those exceptions
into readable pytest failures, plus fixtures that give each test a pristine
registry and an in-memory store.

ARCHITECTURE
────────────
::

    Failure translation:
      rescue()                        → FactoryError → pytest.fail("[spine-fixtures] ...")
      assert_no_factory_errors(auto)  → AutoExecutor error → pytest.fail

    Isolation helpers:
      snapshot(record)                → field values at a point in time
      assert_unchanged(reg, name, s)  → prototype still matches snapshot

    Fixtures (import into conftest.py):
      factory_registry   init_registry() … reset_registry()
      sqlite_store       connect_sqlite(settings.database_path) … close()
      auto_executor      AutoExecutor(sqlite_store, registry=factory_registry)

Example::

    from spine_fixtures.testing import rescue

    def test_person(factory_registry, sqlite_store):
        out = Person()
        with rescue():
            create("a_person", out=out).exec(sqlite_store)
        assert out.id is not None

Tags:
    spine-fixtures, testing, pytest, harness, fixtures

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

import pytest

from spine_fixtures.core.errors import FactoryError
from spine_fixtures.core.settings import get_settings
from spine_fixtures.factories.executor import AutoExecutor
from spine_fixtures.factories.records import iter_fields
from spine_fixtures.factories.registry import FactoryRegistry, init_registry, reset_registry
from spine_fixtures.store import connect_sqlite

FAILURE_PREFIX = "[spine-fixtures]"

# ---------------------------------------------------------------------------
# Failure translation
# ---------------------------------------------------------------------------


@contextmanager
def rescue(prefix: str = FAILURE_PREFIX) -> Iterator[None]:
    """Fail the running test when the block raises a ``FactoryError``."""
    try:
        yield
    except FactoryError as e:
        pytest.fail(f"{prefix} {e}", pytrace=False)


def assert_no_factory_errors(executor: AutoExecutor, prefix: str = FAILURE_PREFIX) -> None:
    """Fail the running test if ``executor`` accumulated an error."""
    error = executor.err()
    if error is not None:
        pytest.fail(f"{prefix} {error}", pytrace=False)


# ---------------------------------------------------------------------------
# Isolation helpers
# ---------------------------------------------------------------------------


def snapshot(record: Any) -> dict[str, Any]:
    """Capture a record's field values."""
    return dict(iter_fields(record))


def assert_unchanged(registry: FactoryRegistry, name: str, expected: dict[str, Any]) -> None:
    """Assert the prototype bound to ``name`` still matches ``expected``."""
    current = snapshot(registry.lookup(name))
    assert current == expected, f"prototype {name!r} was mutated: {expected!r} -> {current!r}"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def factory_registry() -> Generator[FactoryRegistry, None, None]:
    """Fresh process-wide registry, discarded after the test."""
    reset_registry()
    registry = init_registry()
    try:
        yield registry
    finally:
        reset_registry()


@pytest.fixture
def sqlite_store() -> Generator[Any, None, None]:
    """SQLite connection at ``SPINE_FIXTURES_DATABASE_PATH`` (in-memory by default)."""
    conn = connect_sqlite(get_settings().database_path)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def auto_executor(sqlite_store: Any, factory_registry: FactoryRegistry) -> AutoExecutor:
    """AutoExecutor bound to ``sqlite_store`` and ``factory_registry``."""
    return AutoExecutor(sqlite_store, registry=factory_registry)


__all__ = [
    "FAILURE_PREFIX",
    "rescue",
    "assert_no_factory_errors",
    "snapshot",
    "assert_unchanged",
    "factory_registry",
    "sqlite_store",
    "auto_executor",
]
