"""Tests for grammar assembly."""

import pytest
from pydantic import ValidationError

from typegrammar.core.assembler import CompilerOptions, build_grammar
from typegrammar.core.errors import (
    DuplicateElementError,
    UnknownRootTypeError,
    UnresolvedTypeError,
    UnsupportedDeclarationError,
)
from typegrammar.core.ir import (
    EnumMemberSpec,
    EnumSpec,
    OtherDeclSpec,
    PropertySpec,
    RecordSpec,
    SchemaSpec,
    SourceLocation,
    TypeExpr,
    reference,
)

BUILTINS = ["string", "boolean", "ws", "number", "stringlist", "numberlist"]


class TestBuildGrammar:
    """Tests for build_grammar()."""

    def test_root_element_first(self, address_record):
        grammar = build_grammar(SchemaSpec(declarations=[address_record]), "PostalAddress")

        assert grammar.elements[0].identifier == "root"
        assert grammar.elements[0].alternatives == (reference("PostalAddress"),)
        assert grammar.root is grammar.elements[0]

    def test_element_order(self, candidate_schema):
        """Later declarations come first; built-in rules come last."""
        grammar = build_grammar(candidate_schema, "JobCandidate")

        assert grammar.identifiers == [
            "root",
            "WorkExperience",
            "WorkExperiencelist",
            "JobCandidate",
            "JobCandidatelist",
            *BUILTINS,
        ]

    def test_unreferenced_records_still_compiled(self, candidate_schema):
        """Every record gets elements, whichever record is the root."""
        grammar = build_grammar(candidate_schema, "WorkExperience")
        assert "JobCandidate" in grammar
        assert "JobCandidatelist" in grammar

    def test_enum_declared_after_use(self, color_enum):
        car = RecordSpec(
            name="Car", properties=[PropertySpec(name="paint", type=TypeExpr.of("Color"))]
        )
        grammar = build_grammar(SchemaSpec(declarations=[car, color_enum]), "Car")
        assert grammar.identifiers[:4] == ["root", "Color", "Car", "Carlist"]

    def test_deterministic(self, candidate_schema):
        first = build_grammar(candidate_schema, "JobCandidate")
        second = build_grammar(candidate_schema, "JobCandidate")
        assert first == second

    def test_grammar_is_frozen(self, address_record):
        grammar = build_grammar(SchemaSpec(declarations=[address_record]), "PostalAddress")
        with pytest.raises(ValidationError):
            grammar.elements = ()


class TestRootValidation:
    """Root name checks."""

    def test_unknown_root(self, address_record):
        with pytest.raises(UnknownRootTypeError) as exc_info:
            build_grammar(SchemaSpec(declarations=[address_record]), "Missing")

        error = exc_info.value
        assert error.root == "Missing"
        assert error.valid_names == ["PostalAddress"]
        assert "Root type 'Missing' not found" in str(error)
        assert "PostalAddress" in str(error)

    def test_enum_cannot_be_root(self, address_record, color_enum):
        with pytest.raises(UnknownRootTypeError):
            build_grammar(SchemaSpec(declarations=[address_record, color_enum]), "Color")

    def test_compile_errors_come_before_root_check(self):
        bad = RecordSpec(
            name="Car", properties=[PropertySpec(name="engine", type=TypeExpr.of("Engine"))]
        )
        with pytest.raises(UnresolvedTypeError):
            build_grammar(SchemaSpec(declarations=[bad]), "Missing")


class TestDeclarationErrors:
    """Declarations that cannot be assembled."""

    def test_other_declaration(self, address_record):
        other = OtherDeclSpec(
            declaration_kind="type alias",
            name="Id",
            location=SourceLocation(file="schema.ts", line=3, column=1),
        )
        with pytest.raises(UnsupportedDeclarationError) as exc_info:
            build_grammar(SchemaSpec(declarations=[address_record, other]), "PostalAddress")

        assert exc_info.value.kind == "type alias"
        assert exc_info.value.name == "Id"
        assert exc_info.value.context.line == 3

    def test_record_shadowing_builtin(self):
        clash = RecordSpec(name="string")
        with pytest.raises(DuplicateElementError) as exc_info:
            build_grammar(SchemaSpec(declarations=[clash]), "string")
        assert exc_info.value.identifiers == ["string", "stringlist"]

    def test_record_named_root(self):
        with pytest.raises(DuplicateElementError) as exc_info:
            build_grammar(SchemaSpec(declarations=[RecordSpec(name="root")]), "root")
        assert exc_info.value.identifiers == ["root"]

    def test_record_and_enum_share_name(self, color_enum):
        clash = RecordSpec(name="Color")
        with pytest.raises(DuplicateElementError):
            build_grammar(SchemaSpec(declarations=[clash, color_enum]), "Color")

    def test_enum_collides_with_list_element(self):
        car = RecordSpec(name="Car")
        enum = EnumSpec(name="Carlist", members=[EnumMemberSpec(name="A", value="a")])
        with pytest.raises(DuplicateElementError) as exc_info:
            build_grammar(SchemaSpec(declarations=[car, enum]), "Car")
        assert exc_info.value.identifiers == ["Carlist"]


class TestReferencedLists:
    """list_elements="referenced" emits list elements only where used."""

    def test_drops_unused_lists(self, candidate_schema):
        options = CompilerOptions(list_elements="referenced")
        grammar = build_grammar(candidate_schema, "JobCandidate", options)

        assert "WorkExperiencelist" in grammar
        assert "JobCandidatelist" not in grammar

    def test_referenced_output_unchanged(self, candidate_schema):
        eager = build_grammar(candidate_schema, "JobCandidate")
        lazy = build_grammar(
            candidate_schema, "JobCandidate", CompilerOptions(list_elements="referenced")
        )
        for identifier in lazy.identifiers:
            assert lazy.get(identifier) == eager.get(identifier)

    @pytest.mark.parametrize("root", ["Foo", "Foolist"])
    def test_collision_with_list_element_still_detected(self, root):
        """A declaration named like a generated list element is never pruned away."""
        schema = SchemaSpec(
            declarations=[
                RecordSpec(
                    name="Foo", properties=[PropertySpec(name="a", type=TypeExpr.of("string"))]
                ),
                RecordSpec(
                    name="Foolist",
                    properties=[PropertySpec(name="b", type=TypeExpr.of("number"))],
                ),
            ]
        )
        with pytest.raises(DuplicateElementError) as exc_info:
            build_grammar(schema, root, CompilerOptions(list_elements="referenced"))
        assert exc_info.value.identifiers == ["Foolist"]

    def test_default_is_all(self):
        assert CompilerOptions().list_elements == "all"

    def test_invalid_mode(self):
        with pytest.raises(ValidationError):
            CompilerOptions(list_elements="some")
