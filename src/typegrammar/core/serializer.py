"""
Canonical text rendering of grammars.

Each element renders on its own line as ``identifier ::= alt1 | alt2``.
Sequence members are separated by three spaces, literals are JSON-quoted,
references are bare identifiers, character classes are emitted verbatim,
and repeated groups end in ``*``:

    root ::= Person
    Person ::= "{"   ws   "\\"name\\":"   ws   string   "}"
    Personlist ::= "[]" | "["   ws   Person   (","   ws   Person)*   "]"

Constrained decoders parse this exact form, so rendering must stay stable.
"""

from __future__ import annotations

import json
import re
from collections import defaultdict

from .errors import DanglingReferenceError, InvalidIdentifierError
from .ir import (
    AlternationRule,
    CharClassRule,
    Grammar,
    GrammarElement,
    GrammarRule,
    GroupRule,
    LiteralRule,
    ReferenceRule,
    SequenceRule,
)

IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z]+$")

SEQUENCE_SEPARATOR = "   "
ALTERNATIVE_SEPARATOR = " | "


def serialize_rule(rule: GrammarRule) -> str:
    """Render a single rule tree."""
    if isinstance(rule, SequenceRule):
        return serialize_sequence(rule)
    if isinstance(rule, GroupRule):
        return f"({serialize_sequence(rule.sequence)}){'*' if rule.repeat else ''}"
    if isinstance(rule, LiteralRule):
        return json.dumps(rule.literal, ensure_ascii=False)
    if isinstance(rule, ReferenceRule):
        return rule.referee
    if isinstance(rule, CharClassRule):
        return rule.pattern
    if isinstance(rule, AlternationRule):
        return f"({ALTERNATIVE_SEPARATOR.join(serialize_rule(o) for o in rule.options)})"
    raise TypeError(f"Unknown rule {rule!r}")


def serialize_sequence(rule: SequenceRule) -> str:
    return SEQUENCE_SEPARATOR.join(serialize_rule(child) for child in rule.rules)


def serialize_element(element: GrammarElement) -> str:
    """Render one element without validating it."""
    alternatives = ALTERNATIVE_SEPARATOR.join(serialize_rule(a) for a in element.alternatives)
    return f"{element.identifier} ::= {alternatives}"


def validate_grammar(grammar: Grammar) -> None:
    """
    Check rule names and reference integrity.

    Every offending identifier, and every dangling reference anywhere in
    the grammar, is collected before raising.

    Raises:
        InvalidIdentifierError: If any element name is not ASCII letters only
        DanglingReferenceError: If any reference names no element
    """
    invalid = [
        element.identifier
        for element in grammar.elements
        if not IDENTIFIER_PATTERN.fullmatch(element.identifier)
    ]
    if invalid:
        raise InvalidIdentifierError(invalid)

    declared = set(grammar.identifiers)
    dangling: dict[str, set[str]] = defaultdict(set)
    for element in grammar.elements:
        for ref in element.references():
            if ref.referee not in declared:
                dangling[ref.referee].add(element.identifier)
    if dangling:
        raise DanglingReferenceError(dangling)


def serialize_grammar(grammar: Grammar) -> str:
    """
    Validate and render a grammar, one newline-terminated line per element.

    Raises:
        SerializationError: If validation fails; nothing is rendered
    """
    validate_grammar(grammar)
    return "".join(f"{serialize_element(element)}\n" for element in grammar.elements)
