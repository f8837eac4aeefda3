"""
typegrammar - compile record and enum declarations into JSON grammars.

Produces BNF-style grammar text that constrains a language model's output
to JSON documents shaped like a chosen root record.
"""

from __future__ import annotations

from ._version import get_version
from .api import compile_schema, compile_source, compile_to_text, submit_compile
from .core import ir
from .core.assembler import CompilerOptions
from .core.errors import (
    CompileError,
    ManifestError,
    ParseError,
    SerializationError,
    TypeGrammarError,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "CompilerOptions",
    "compile_schema",
    "compile_to_text",
    "compile_source",
    "submit_compile",
    "TypeGrammarError",
    "ParseError",
    "CompileError",
    "SerializationError",
    "ManifestError",
]
