"""Settings for spine-fixtures.

Manifesto:
    Test suites differ in how strict they want factories to be. Rather than
    threading flags through every ``create()`` call, the defaults live in one
    validated, environment-driven settings object.

    - **Pydantic validation:** Type-checked when first loaded
    - **Environment-driven:** ``SPINE_FIXTURES_*`` variables and ``.env`` files
    - **Cached:** One instance per process until ``clear_settings_cache()``

Examples:
    >>> from spine_fixtures.core.settings import get_settings
    >>> get_settings().strict_types
    True

Tags:
    settings, configuration, pydantic, environment, spine-fixtures

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FactorySettings(BaseSettings):
    """Factory engine configuration.

    Fields
    ──────
    log_level      : Structlog log level
    log_format     : ``json`` or ``console``
    strict_types   : Overlay values must match declared field types
    deep_clone     : Clone prototypes recursively instead of memberwise
    database_path  : SQLite path used by the pytest fixtures
    """

    model_config = SettingsConfigDict(
        env_prefix="SPINE_FIXTURES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console"] = Field(default="console")

    # ── Factory behaviour ────────────────────────────────────────
    strict_types: bool = Field(
        default=True,
        description="Reject overlay values whose type does not match the field",
    )
    deep_clone: bool = Field(
        default=False,
        description="Deep copy field values when cloning prototypes",
    )

    # ── Store ────────────────────────────────────────────────────
    database_path: str = Field(default=":memory:")


_settings_cache: dict[str, FactorySettings] = {}


def get_settings(*, _force_reload: bool = False) -> FactorySettings:
    """Load, validate, and cache a :class:`FactorySettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = FactorySettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = [
    "FactorySettings",
    "get_settings",
    "clear_settings_cache",
]
