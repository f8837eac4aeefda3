"""Tests for property type resolution."""

import pytest

from typegrammar.core.errors import UnresolvedTypeError
from typegrammar.core.ir import (
    ArrayType,
    PropertySpec,
    SimpleType,
    SourceLocation,
    TypeExpr,
    UnionType,
    alternation,
    reference,
)
from typegrammar.core.registry import base_registry
from typegrammar.core.resolver import (
    RESOLUTION_STEPS,
    TypeResolver,
    array_element,
    list_identifier,
    type_rule,
)


@pytest.fixture
def resolver() -> TypeResolver:
    return TypeResolver.create(base_registry(), {"Address", "Foo"}, {"Color"})


def prop(spelling: str, name: str = "field") -> PropertySpec:
    return PropertySpec(name=name, type=TypeExpr.model_validate(spelling))


class TestArrayElement:
    """Tests for array spelling detection."""

    @pytest.mark.parametrize(
        ("spelling", "expected"),
        [
            ("Foo[]", "Foo"),
            ("Array<Foo>", "Foo"),
            ("Array< Foo >", "Foo"),
            ("string[]", "string"),
            ("Foo", None),
            ("Foo[][]", None),
            ("Map<string, Foo>", None),
        ],
    )
    def test_spellings(self, spelling, expected):
        assert array_element(spelling) == expected


class TestResolveSpelling:
    """Tests for the resolution decision table."""

    def test_step_order(self):
        assert [step.name for step in RESOLUTION_STEPS] == [
            "registry",
            "scalar-list",
            "enum",
            "record",
            "record-array",
        ]

    @pytest.mark.parametrize("scalar", ["string", "number", "boolean"])
    def test_scalars(self, resolver, scalar):
        assert resolver.resolve_spelling(scalar) == SimpleType(identifier=scalar)

    def test_scalar_lists(self, resolver):
        assert resolver.resolve_spelling("string[]") == SimpleType(identifier="stringlist")
        assert resolver.resolve_spelling("Array<number>") == SimpleType(identifier="numberlist")

    def test_boolean_array_is_unsupported(self, resolver):
        assert resolver.resolve_spelling("boolean[]") is None

    def test_enum(self, resolver):
        assert resolver.resolve_spelling("Color") == SimpleType(identifier="Color")

    def test_record(self, resolver):
        assert resolver.resolve_spelling("Address") == SimpleType(identifier="Address")

    def test_record_array(self, resolver):
        assert resolver.resolve_spelling("Address[]") == ArrayType(record="Address")
        assert resolver.resolve_spelling("Array<Address>") == ArrayType(record="Address")

    def test_enum_array_is_unsupported(self, resolver):
        assert resolver.resolve_spelling("Color[]") is None

    def test_unknown(self, resolver):
        assert resolver.resolve_spelling("Engine") is None


class TestResolve:
    """Tests for resolving whole property types."""

    def test_single_spelling(self, resolver):
        assert resolver.resolve("Car", prop("number")) == SimpleType(identifier="number")

    def test_union_keeps_declared_order(self, resolver):
        resolved = resolver.resolve("Car", prop("string | number"))
        assert resolved == UnionType(
            members=(SimpleType(identifier="string"), SimpleType(identifier="number"))
        )

    def test_union_with_enum_boolean_and_array(self, resolver):
        resolved = resolver.resolve("Car", prop("Color | boolean | Foo[]"))
        assert isinstance(resolved, UnionType)
        assert resolved.members == (
            SimpleType(identifier="Color"),
            SimpleType(identifier="boolean"),
            ArrayType(record="Foo"),
        )

    def test_repeated_member_collapses(self, resolver):
        assert resolver.resolve("Car", prop("string | string")) == SimpleType(identifier="string")

    def test_unresolved_names_record_and_property(self, resolver):
        with pytest.raises(UnresolvedTypeError) as exc_info:
            resolver.resolve("Car", prop("Engine", name="engine"))

        error = exc_info.value
        assert error.record == "Car"
        assert error.prop == "engine"
        assert error.type_text == "Engine"
        assert "Failed resolving property Car.engine: unsupported type Engine" in str(error)

    def test_unresolved_union_member(self, resolver):
        with pytest.raises(UnresolvedTypeError) as exc_info:
            resolver.resolve("Car", prop("string | Engine"))
        assert exc_info.value.type_text == "Engine"

    def test_error_carries_location(self, resolver):
        located = PropertySpec(
            name="engine",
            type=TypeExpr.of("Engine"),
            location=SourceLocation(file="cars.ts", line=7, column=3),
        )
        with pytest.raises(UnresolvedTypeError) as exc_info:
            resolver.resolve("Car", located)
        assert exc_info.value.context is not None
        assert exc_info.value.context.line == 7
        assert str(exc_info.value).startswith("cars.ts:7:3")


class TestTypeRule:
    """Tests for the value-slot rule of a resolved type."""

    def test_simple(self):
        assert type_rule(SimpleType(identifier="string")) == reference("string")

    def test_record_array_references_list_element(self):
        """An array of Foo refers to Foolist, not Foo."""
        assert type_rule(ArrayType(record="Foo")) == reference("Foolist")

    def test_union(self):
        union = UnionType(
            members=(SimpleType(identifier="string"), ArrayType(record="Foo"))
        )
        assert type_rule(union) == alternation(reference("string"), reference("Foolist"))

    def test_list_identifier(self):
        assert list_identifier("Foo") == "Foolist"
