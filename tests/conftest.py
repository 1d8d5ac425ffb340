"""
Shared pytest fixtures and configuration for spine-fixtures tests.

This module provides:
- Registry and settings cleanup for test isolation
- The harness fixtures from spine_fixtures.testing
- An in-memory SQLite store with the person/pet schema

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    def test_something(factory_registry, person_store):
        ...
"""

import sys
from pathlib import Path
from typing import Generator

import pytest

# Ensure spine_fixtures and tests._support are importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from spine_fixtures.core.logging import configure_logging
from spine_fixtures.core.settings import clear_settings_cache
from spine_fixtures.factories.registry import reset_registry
from spine_fixtures.testing import auto_executor, factory_registry, sqlite_store  # noqa: F401

from tests._support.records import PERSON_SCHEMA, Tracked


def pytest_configure(config: pytest.Config) -> None:
    """Keep factory debug events out of test output."""
    configure_logging(level="WARNING", json_format=False)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_factory_state_fixture() -> Generator[None, None, None]:
    """
    Reset the process-wide registry and settings cache around each test.

    No test can leak definitions or SPINE_FIXTURES_* settings into another.
    """
    reset_registry()
    clear_settings_cache()
    Tracked.calls.clear()
    yield
    reset_registry()
    clear_settings_cache()
    Tracked.calls.clear()


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def person_store(sqlite_store):
    """In-memory SQLite store with the person and pet tables."""
    sqlite_store.executescript(PERSON_SCHEMA)
    return sqlite_store
