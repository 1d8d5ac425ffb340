"""
Tests for the single-factory API: create(...).with_attrs(...).exec(store).

Scenarios run against an in-memory SQLite store with the person table.
"""

import pytest

from spine_fixtures.core.errors import (
    AssignmentTypeMismatchError,
    DefinitionNotFoundError,
    InvalidStoreError,
    RegistryNotInitializedError,
    TypeMismatchError,
    UnknownFieldError,
    UnsupportedFactoryError,
)
from spine_fixtures.factories.assembly import Assembly, create
from spine_fixtures.factories.assign import Ref
from spine_fixtures.factories.registry import FactoryRegistry, define, lookup
from spine_fixtures.testing import assert_unchanged, snapshot

from tests._support.records import Customer, Pet, Person, Unsavable
from tests._support.stores import RecordingConnection, count_rows


def find_person(conn, person_id):
    row = conn.execute(
        "SELECT id, name, age FROM person WHERE id = ?", (person_id,)
    ).fetchone()
    return Person(id=row["id"], name=row["name"], age=row["age"])


class TestCreatesRecordFromDefinition:
    def test_creates_new_record(self, factory_registry, person_store):
        define("a_person", Person(name="Bob", age=15))

        out = Person()
        create("a_person", out=out).exec(person_store)

        assert out.id is not None
        assert find_person(person_store, out.id) == Person(id=out.id, name="Bob", age=15)
        assert (out.name, out.age) == ("Bob", 15)

    def test_overwriting_attributes(self, factory_registry, person_store):
        prototype = define("a_person", Person(name="Bob", age=15))

        out = Person()
        create("a_person", out=out).with_attrs({"name": "John", "age": 1}).exec(person_store)

        assert find_person(person_store, out.id) == Person(id=out.id, name="John", age=1)
        assert lookup("a_person") is prototype
        assert prototype == Person(name="Bob", age=15)

    def test_attrs_passed_to_create(self, factory_registry, person_store):
        define("a_person", Person(name="Bob", age=15))

        out = Person()
        create("a_person", {"name": "John", "age": 1}, out).exec(person_store)

        assert (out.name, out.age) == ("John", 1)

    def test_exec_returns_result(self, factory_registry, person_store):
        define("a_person", Person(name="Bob"))
        result = create("a_person").exec(person_store)
        assert isinstance(result, Person)
        assert result.id == 1

    def test_ref_output(self, factory_registry, person_store):
        define("a_person", Person(name="Bob"))
        ref = Ref()
        create("a_person", out=ref).exec(person_store)
        assert ref.value.name == "Bob"

    def test_no_output_target(self, factory_registry, person_store):
        define("a_person", Person(name="Bob"))
        create("a_person").exec(person_store)
        assert count_rows(person_store, "person") == 1


class TestIsolation:
    def test_prototype_unchanged_across_creates(self, factory_registry, person_store):
        define("a_person", Person(name="Bob", age=15, tags=["x"]))
        before = snapshot(lookup("a_person"))

        for age in range(3):
            create("a_person", {"age": age}).exec(person_store)

        assert_unchanged(factory_registry, "a_person", before)

    def test_overlay_not_visible_on_other_clones(self, factory_registry):
        define("a_person", Person(name="Bob"))
        first = create("a_person", {"name": "John"})
        second = create("a_person")
        assert first.factory.name == "John"
        assert second.factory.name == "Bob"

    def test_saved_id_not_written_to_prototype(self, factory_registry, person_store):
        prototype = define("a_person", Person(name="Bob"))
        create("a_person").exec(person_store)
        assert prototype.id is None

    def test_shallow_clone_aliases_nested(self, factory_registry):
        prototype = define("a_customer", Customer(name="Ann"))
        assembly = create("a_customer")
        assert assembly.factory.address is prototype.address

    def test_deep_clone_option(self, factory_registry):
        prototype = define("a_customer", Customer(name="Ann"))
        assembly = create("a_customer", deep=True)
        assert assembly.factory.address is not prototype.address


class TestFailures:
    def test_not_found(self, factory_registry):
        with pytest.raises(DefinitionNotFoundError, match="Definition not found: a_person"):
            create("a_person")

    def test_registry_not_initialized(self):
        with pytest.raises(RegistryNotInitializedError):
            create("a_person")

    def test_unknown_field(self, factory_registry):
        define("a_person", Person())
        with pytest.raises(UnknownFieldError):
            create("a_person").with_attrs({"nickname": "B"})

    def test_type_mismatch(self, factory_registry):
        define("a_person", Person())
        with pytest.raises(TypeMismatchError):
            create("a_person", {"age": "old"})

    def test_strict_off(self, factory_registry):
        define("a_person", Person())
        assert create("a_person", {"age": "old"}, strict=False).factory.age == "old"

    def test_unsupported_factory(self, factory_registry, person_store):
        define("plain", Unsavable())
        with pytest.raises(UnsupportedFactoryError):
            create("plain").exec(person_store)

    def test_invalid_store(self, factory_registry):
        define("a_person", Person())
        with pytest.raises(InvalidStoreError):
            create("a_person").exec("not a store")

    def test_output_type_mismatch(self, factory_registry, person_store):
        define("a_person", Person(name="Bob"))
        with pytest.raises(AssignmentTypeMismatchError):
            create("a_person", out=Pet()).exec(person_store)


class TestExplicitRegistry:
    def test_registry_create(self):
        registry = FactoryRegistry()
        registry.define("a_person", Person(name="Bob"))
        conn = RecordingConnection()

        out = Person()
        assembly = registry.create("a_person", {"age": 3}, out)
        assert isinstance(assembly, Assembly)
        assembly.exec(conn)

        assert (out.id, out.name, out.age) == (1, "Bob", 3)

    def test_create_with_registry_keyword(self):
        registry = FactoryRegistry()
        registry.define("a_person", Person(name="Bob"))
        assembly = create("a_person", registry=registry)
        assert assembly.name == "a_person"
        assert "a_person" in repr(assembly)
