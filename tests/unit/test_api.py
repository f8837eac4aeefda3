"""Tests for the public compilation API."""

from concurrent.futures import Future

import pytest

import typegrammar
from typegrammar import (
    CompilerOptions,
    ParseError,
    compile_schema,
    compile_source,
    compile_to_text,
    submit_compile,
)
from typegrammar.core.errors import UnknownRootTypeError, UnresolvedTypeError
from typegrammar.core.ir import Grammar, SchemaSpec

CAR_LINE = (
    r'Car ::= "{"   ws   "\"make\":"   ws   string   ","   ws   "\"colors\":"   ws   stringlist'
    r'   ","   ws   "\"paint\":"   ws   (Color | string)   ","   ws   "\"owners\":"   ws   Ownerlist'
    r'   "}"'
)


class TestCompileSource:
    """Tests for compile_source()."""

    def test_car_source(self, car_source):
        lines = compile_source(car_source, "Car").splitlines()

        assert lines[0] == "root ::= Car"
        assert lines[1] == CAR_LINE
        assert lines[2].startswith("Carlist ::= ")
        assert r'Color ::= "\"red\"" | "\"blue\""' in lines
        assert any(line.startswith("Ownerlist ::= ") for line in lines)

    def test_extra_enum_source(self):
        text = compile_source(
            "interface Shirt { size: Size }",
            "Shirt",
            enum_text='enum Size { S = "s", M = "m" }',
        )
        identifiers = [line.split(" ::= ")[0] for line in text.splitlines()]
        assert identifiers[:4] == ["root", "Shirt", "Shirtlist", "Size"]

    def test_enum_source_must_only_declare_enums(self):
        with pytest.raises(ParseError, match="only declare enums"):
            compile_source("interface A { x: string }", "A", enum_text="interface B { y: string }")

    def test_options(self, car_source):
        options = CompilerOptions(list_elements="referenced")
        text = compile_source(car_source, "Car", options=options)
        assert "Carlist ::=" not in text
        assert "Ownerlist ::=" in text

    def test_unresolved_type_location(self):
        source = "interface Car {\n  engine: Engine\n}"
        with pytest.raises(UnresolvedTypeError) as exc_info:
            compile_source(source, "Car")
        assert exc_info.value.context.line == 2


class TestCompileSchema:
    def test_returns_grammar(self, address_record):
        grammar = compile_schema(SchemaSpec(declarations=[address_record]), "PostalAddress")
        assert isinstance(grammar, Grammar)
        assert grammar.identifiers[0] == "root"

    def test_text_matches_grammar(self, candidate_schema):
        text = compile_to_text(candidate_schema, "JobCandidate")
        assert text.splitlines()[0] == "root ::= JobCandidate"


class TestSubmitCompile:
    """submit_compile() returns an already-completed future."""

    def test_result(self, candidate_schema):
        future = submit_compile(candidate_schema, "JobCandidate")

        assert isinstance(future, Future)
        assert future.done()
        assert future.result() == compile_to_text(candidate_schema, "JobCandidate")

    def test_exception(self, candidate_schema):
        future = submit_compile(candidate_schema, "Missing")

        assert future.done()
        assert isinstance(future.exception(), UnknownRootTypeError)
        with pytest.raises(UnknownRootTypeError):
            future.result()


def test_version_exposed():
    assert isinstance(typegrammar.__version__, str)
