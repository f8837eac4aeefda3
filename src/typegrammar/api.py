"""
Public compilation entry points.

    >>> from typegrammar import compile_source
    >>> print(compile_source("interface Person { name: string }", "Person"))
    root ::= Person
    Person ::= "{"   ws   "\\"name\\":"   ws   string   "}"
    ...

Compilation is synchronous and all-or-nothing: either the full grammar is
returned or a ``TypeGrammarError`` is raised and nothing is produced.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from pathlib import Path

from .core.assembler import CompilerOptions, build_grammar
from .core.ir import Grammar, SchemaSpec
from .core.loader import require_enums_only
from .core.parser import parse_schema
from .core.serializer import serialize_grammar

logger = logging.getLogger(__name__)


def compile_schema(
    schema: SchemaSpec, root: str, options: CompilerOptions | None = None
) -> Grammar:
    """Compile declarations into a grammar model (validated when rendered)."""
    return build_grammar(schema, root, options)


def compile_to_text(
    schema: SchemaSpec, root: str, options: CompilerOptions | None = None
) -> str:
    """Compile declarations and render the grammar text."""
    return serialize_grammar(build_grammar(schema, root, options))


def compile_source(
    text: str,
    root: str,
    *,
    enum_text: str | None = None,
    file: Path | None = None,
    options: CompilerOptions | None = None,
) -> str:
    """
    Parse declaration source and compile it to grammar text.

    Args:
        text: Interface/enum declarations
        root: Name of the root interface
        enum_text: Optional extra source holding only enum declarations
        file: Path used in error locations
        options: Compilation options

    Raises:
        ParseError: If either source is malformed
        CompileError: If declarations cannot be compiled
        SerializationError: If the grammar fails validation
    """
    schema = parse_schema(text, file)
    if enum_text is not None:
        enums = require_enums_only(parse_schema(enum_text), "<enums>")
        schema = enums.merged_with(schema)
    logger.debug("Compiling %d declarations for root %s", len(schema.declarations), root)
    return compile_to_text(schema, root, options)


def submit_compile(
    schema: SchemaSpec, root: str, options: CompilerOptions | None = None
) -> Future[str]:
    """
    Compile into an already-completed future.

    For hosts that expect an asynchronous interface. The future carries the
    grammar text or the ``TypeGrammarError`` raised; no thread is started.
    """
    future: Future[str] = Future()
    try:
        future.set_result(compile_to_text(schema, root, options))
    except Exception as exc:
        future.set_exception(exc)
    return future
