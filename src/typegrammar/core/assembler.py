"""
Grammar assembly.

Walks a schema's declarations once, compiles each record and enumeration,
and assembles the results with the built-in rules and a ``root`` production
into one grammar.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Literal

from pydantic import BaseModel, ConfigDict

from .compiler import compile_enum, compile_record
from .errors import DuplicateElementError, UnknownRootTypeError, UnsupportedDeclarationError
from .ir import (
    ROOT_IDENTIFIER,
    EnumSpec,
    Grammar,
    GrammarElement,
    OtherDeclSpec,
    RecordSpec,
    SchemaSpec,
    context_of,
    reference,
)
from .registry import base_registry, registry_elements
from .resolver import TypeResolver, list_identifier

logger = logging.getLogger(__name__)


class CompilerOptions(BaseModel):
    """
    Options for one compilation.

    Attributes:
        list_elements: ``"all"`` emits a list element for every record;
            ``"referenced"`` emits list elements only for records used in
            array position. Output for referenced records is identical.
    """

    list_elements: Literal["all", "referenced"] = "all"

    model_config = ConfigDict(frozen=True)


def build_grammar(
    schema: SchemaSpec,
    root: str,
    options: CompilerOptions | None = None,
) -> Grammar:
    """
    Build a complete grammar from schema declarations.

    Performs:
    1. Per-declaration compilation, in source order
    2. Root type validation
    3. Duplicate rule name detection
    4. Optional pruning of unreferenced list elements
    5. Root production insertion

    Each compiled declaration's elements are placed ahead of those compiled
    before it, so the result reads: ``root``, declarations in reverse source
    order, then built-in rules.

    Args:
        schema: Ordered top-level declarations
        root: Name of the record the grammar's start production refers to
        options: Compilation options (defaults apply when omitted)

    Returns:
        Frozen, assembled grammar

    Raises:
        CompileError: If any declaration cannot be compiled or the root is unknown
    """
    options = options or CompilerOptions()
    registry = base_registry()
    resolver = TypeResolver.create(registry, schema.record_names, schema.enum_names)

    elements: list[GrammarElement] = registry_elements(registry)
    for declaration in schema.declarations:
        if isinstance(declaration, RecordSpec):
            elements[:0] = compile_record(declaration, resolver)
        elif isinstance(declaration, EnumSpec):
            elements.insert(0, compile_enum(declaration))
        elif isinstance(declaration, OtherDeclSpec):
            raise UnsupportedDeclarationError(
                declaration.declaration_kind,
                declaration.name,
                context_of(declaration.location),
            )
        else:
            raise UnsupportedDeclarationError(type(declaration).__name__)

    if root not in schema.record_names:
        raise UnknownRootTypeError(root, schema.record_names)

    duplicates = [
        identifier
        for identifier, count in Counter(
            [ROOT_IDENTIFIER, *(element.identifier for element in elements)]
        ).items()
        if count > 1
    ]
    if duplicates:
        raise DuplicateElementError(duplicates)

    # Identifiers are unique from here on, so pruning by name cannot hit a declaration.
    if options.list_elements == "referenced":
        elements = _drop_unreferenced_lists(elements, schema)

    root_element = GrammarElement(identifier=ROOT_IDENTIFIER, alternatives=(reference(root),))
    grammar = Grammar(elements=(root_element, *elements))
    logger.debug(
        "Assembled grammar for %s: %d elements from %d declarations",
        root,
        len(grammar),
        len(schema.declarations),
    )
    return grammar


def _drop_unreferenced_lists(
    elements: list[GrammarElement], schema: SchemaSpec
) -> list[GrammarElement]:
    """Remove record list elements that no other element references."""
    list_names = {list_identifier(name) for name in schema.record_names}
    referenced = {
        ref.referee
        for element in elements
        if element.identifier not in list_names
        for ref in element.references()
    }
    unused = list_names - referenced
    if unused:
        logger.debug("Dropping unreferenced list elements: %s", sorted(unused))
    return [element for element in elements if element.identifier not in unused]
