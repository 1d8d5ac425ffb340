"""
Tests for spine_fixtures.factories.registry module.

Tests cover:
- Definition and lookup on an explicit FactoryRegistry
- Redefinition protection (first binding wins)
- Process-wide lifecycle: init, reset, use before init, double init
- Adopting a caller-provided mapping
"""

import pytest

from spine_fixtures.core.errors import (
    AlreadyInitializedError,
    DefinitionNotFoundError,
    InvalidPrototypeError,
    RedefinitionError,
    RegistryNotInitializedError,
)
from spine_fixtures.factories.registry import (
    FactoryRegistry,
    define,
    get_registry,
    init_registry,
    lookup,
    reset_registry,
)

from tests._support.records import Person


class TestDefine:
    """Tests for FactoryRegistry.define."""

    def test_define_returns_prototype(self):
        registry = FactoryRegistry()
        bob = Person(name="Bob")
        assert registry.define("a_person", bob) is bob
        assert "a_person" in registry

    def test_redefinition_raises(self):
        registry = FactoryRegistry()
        registry.define("a_person", Person(name="Bob"))

        ray = Person(name="Ray")
        with pytest.raises(RedefinitionError) as exc_info:
            registry.define("a_person", ray)

        assert str(exc_info.value) == f"Redefinition of a_person: {ray!r}"
        assert exc_info.value.value is ray

    def test_redefinition_keeps_first_binding(self):
        registry = FactoryRegistry()
        bob = Person(name="Bob")
        registry.define("a_person", bob)

        with pytest.raises(RedefinitionError):
            registry.define("a_person", Person(name="Ray"))

        assert registry.lookup("a_person") is bob
        assert bob.name == "Bob"

    @pytest.mark.parametrize("value", [None, 1, "person", [1], {"name": "Bob"}, Person])
    def test_non_record_rejected(self, value):
        registry = FactoryRegistry()
        with pytest.raises(InvalidPrototypeError):
            registry.define("bad", value)
        assert "bad" not in registry


class TestLookup:
    """Tests for FactoryRegistry.lookup."""

    def test_lookup_returns_prototype(self):
        registry = FactoryRegistry()
        bob = registry.define("a_person", Person(name="Bob"))
        assert registry.lookup("a_person") is bob

    def test_lookup_missing_raises(self):
        registry = FactoryRegistry()
        with pytest.raises(DefinitionNotFoundError, match="Definition not found: nobody"):
            registry.lookup("nobody")

    def test_missing_error_has_no_chained_key_error(self):
        registry = FactoryRegistry()
        with pytest.raises(DefinitionNotFoundError) as exc_info:
            registry.lookup("nobody")
        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__ is True


class TestIntrospection:
    def test_names_sorted(self):
        registry = FactoryRegistry()
        registry.define("z_person", Person())
        registry.define("a_person", Person())
        assert registry.names() == ["a_person", "z_person"]

    def test_len_and_clear(self):
        registry = FactoryRegistry()
        registry.define("a_person", Person())
        assert len(registry) == 1
        registry.clear()
        assert len(registry) == 0

    def test_repr(self):
        registry = FactoryRegistry()
        registry.define("a_person", Person())
        assert repr(registry) == "FactoryRegistry(['a_person'])"

    def test_adopts_provided_mapping(self):
        backing = {}
        registry = FactoryRegistry(backing)
        bob = registry.define("a_person", Person(name="Bob"))
        assert backing == {"a_person": bob}


class TestProcessWideLifecycle:
    """Tests for init_registry / reset_registry / get_registry."""

    def test_use_before_init_raises(self):
        with pytest.raises(RegistryNotInitializedError):
            get_registry()
        with pytest.raises(RegistryNotInitializedError):
            define("a_person", Person())
        with pytest.raises(RegistryNotInitializedError):
            lookup("a_person")

    def test_init_twice_raises(self):
        init_registry()
        with pytest.raises(AlreadyInitializedError, match="^Context is not nil$"):
            init_registry()

    def test_init_returns_current_registry(self):
        registry = init_registry()
        assert get_registry() is registry

    def test_module_define_and_lookup(self):
        init_registry()
        bob = define("a_person", Person(name="Bob"))
        assert lookup("a_person") is bob

    def test_reset_discards_definitions(self):
        init_registry()
        define("a_person", Person())
        reset_registry()

        fresh = init_registry()
        assert "a_person" not in fresh

    def test_reset_is_unconditional(self):
        reset_registry()
        reset_registry()
        with pytest.raises(RegistryNotInitializedError):
            get_registry()

    def test_init_with_mapping(self):
        bob = Person(name="Bob")
        init_registry({"a_person": bob})
        assert lookup("a_person") is bob
