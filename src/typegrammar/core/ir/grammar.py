"""
Grammar types.

A grammar is an ordered set of named productions (elements). Each element
has one or more alternatives; each alternative is a rule tree built from
sequences, repeated groups, literals, references to other elements,
character-class patterns, and inline alternations.

All grammar types are frozen and hold tuples, so an assembled grammar cannot
be modified in place.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

ROOT_IDENTIFIER = "root"


class SequenceRule(BaseModel):
    """Rules matched one after another."""

    type: Literal["sequence"] = "sequence"
    rules: tuple[GrammarRule, ...] = ()

    model_config = ConfigDict(frozen=True)


class GroupRule(BaseModel):
    """A parenthesized sequence, optionally repeated zero or more times."""

    type: Literal["group"] = "group"
    sequence: SequenceRule
    repeat: bool = False

    model_config = ConfigDict(frozen=True)


class LiteralRule(BaseModel):
    """Exact text."""

    type: Literal["literal"] = "literal"
    literal: str

    model_config = ConfigDict(frozen=True)


class ReferenceRule(BaseModel):
    """The production named ``referee``."""

    type: Literal["reference"] = "reference"
    referee: str

    model_config = ConfigDict(frozen=True)


class CharClassRule(BaseModel):
    """A character-class pattern emitted verbatim, e.g. ``[0-9]+``."""

    type: Literal["char-class"] = "char-class"
    pattern: str

    model_config = ConfigDict(frozen=True)


class AlternationRule(BaseModel):
    """Inline choice between options, used for union-typed property slots."""

    type: Literal["alternation"] = "alternation"
    options: tuple[GrammarRule, ...] = Field(min_length=2)

    model_config = ConfigDict(frozen=True)


GrammarRule = Annotated[
    SequenceRule | GroupRule | LiteralRule | ReferenceRule | CharClassRule | AlternationRule,
    Field(discriminator="type"),
]

SequenceRule.model_rebuild()
GroupRule.model_rebuild()
AlternationRule.model_rebuild()


def literal(value: str) -> LiteralRule:
    return LiteralRule(literal=value)


def reference(referee: str) -> ReferenceRule:
    return ReferenceRule(referee=referee)


def char_class(pattern: str) -> CharClassRule:
    return CharClassRule(pattern=pattern)


def sequence(*rules: GrammarRule) -> SequenceRule:
    return SequenceRule(rules=rules)


def star(*rules: GrammarRule) -> GroupRule:
    """Group ``rules`` and repeat the group zero or more times."""
    return GroupRule(sequence=sequence(*rules), repeat=True)


def alternation(*options: GrammarRule) -> AlternationRule:
    return AlternationRule(options=options)


def iter_references(rule: GrammarRule) -> Iterator[ReferenceRule]:
    """Yield every reference nested anywhere inside ``rule``."""
    if isinstance(rule, ReferenceRule):
        yield rule
    elif isinstance(rule, SequenceRule):
        for child in rule.rules:
            yield from iter_references(child)
    elif isinstance(rule, GroupRule):
        yield from iter_references(rule.sequence)
    elif isinstance(rule, AlternationRule):
        for option in rule.options:
            yield from iter_references(option)


class GrammarElement(BaseModel):
    """One named production: ``identifier ::= alt1 | alt2 | ...``."""

    identifier: str
    alternatives: tuple[GrammarRule, ...] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)

    def references(self) -> Iterator[ReferenceRule]:
        for alternative in self.alternatives:
            yield from iter_references(alternative)


class Grammar(BaseModel):
    """
    An ordered set of grammar elements.

    The element named ``root`` is the start production and comes first.
    """

    elements: tuple[GrammarElement, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def identifiers(self) -> list[str]:
        return [element.identifier for element in self.elements]

    @property
    def root(self) -> GrammarElement | None:
        if self.elements and self.elements[0].identifier == ROOT_IDENTIFIER:
            return self.elements[0]
        return None

    def get(self, identifier: str) -> GrammarElement | None:
        for element in self.elements:
            if element.identifier == identifier:
                return element
        return None

    def __contains__(self, identifier: object) -> bool:
        return any(element.identifier == identifier for element in self.elements)

    def __len__(self) -> int:
        return len(self.elements)
