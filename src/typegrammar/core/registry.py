"""
Built-in grammar rules for JSON scalars and scalar lists.

``base_registry()`` builds a new mapping on every call; compilations never
share a mutable registry. Rule objects themselves are frozen and are shared
freely.

Known limitations: strings cannot contain escaped quotes, and numbers have
no sign or exponent.
"""

from __future__ import annotations

from .ir import (
    GrammarElement,
    GrammarRule,
    char_class,
    literal,
    reference,
    sequence,
    star,
)

WS = "ws"
STRING = "string"
NUMBER = "number"
BOOLEAN = "boolean"
STRING_LIST = "stringlist"
NUMBER_LIST = "numberlist"

WS_REF = reference(WS)
STRING_REF = reference(STRING)
NUMBER_REF = reference(NUMBER)

GrammarRegistry = dict[str, tuple[GrammarRule, ...]]


def _scalar_list(item: str) -> tuple[GrammarRule, ...]:
    item_ref = reference(item)
    return (
        sequence(literal("["), WS_REF, literal("]")),
        sequence(
            literal("["),
            WS_REF,
            item_ref,
            star(literal(","), WS_REF, item_ref),
            WS_REF,
            literal("]"),
        ),
    )


def base_registry() -> GrammarRegistry:
    """
    Create the built-in grammar registry.

    Returns:
        Mapping of rule name to alternatives, in output order
    """
    return {
        STRING: (sequence(literal('"'), char_class('([^"]*)'), literal('"')),),
        BOOLEAN: (literal("true"), literal("false")),
        WS: (char_class("[ \\t\\n]*"),),
        NUMBER: (sequence(char_class("[0-9]+"), char_class('"."?'), char_class("[0-9]*")),),
        STRING_LIST: _scalar_list(STRING),
        NUMBER_LIST: _scalar_list(NUMBER),
    }


def registry_elements(registry: GrammarRegistry) -> list[GrammarElement]:
    """Convert a registry mapping into grammar elements, preserving order."""
    return [
        GrammarElement(identifier=identifier, alternatives=alternatives)
        for identifier, alternatives in registry.items()
    ]
