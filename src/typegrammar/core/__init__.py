"""Core typegrammar functionality: IR, parser, loader, compiler, assembler, serializer."""

from . import ir
from .assembler import CompilerOptions, build_grammar
from .errors import (
    CompileError,
    ErrorContext,
    ManifestError,
    ParseError,
    SerializationError,
    TypeGrammarError,
)
from .loader import load_enum_file, load_schema_document, load_schema_file
from .manifest import ProjectManifest, load_manifest
from .parser import parse_schema
from .serializer import serialize_grammar, validate_grammar

__all__ = [
    "ir",
    "TypeGrammarError",
    "ParseError",
    "CompileError",
    "SerializationError",
    "ManifestError",
    "ErrorContext",
    "CompilerOptions",
    "build_grammar",
    "parse_schema",
    "load_schema_file",
    "load_schema_document",
    "load_enum_file",
    "ProjectManifest",
    "load_manifest",
    "serialize_grammar",
    "validate_grammar",
]
