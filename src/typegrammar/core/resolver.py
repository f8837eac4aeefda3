"""
Type resolution for record properties.

Maps a property's declared type spelling onto the grammar element that
describes its JSON value. Resolution is an ordered decision table: each
step inspects the spelling and either claims it or passes. The first step
that claims a spelling wins, so adding a new resolvable kind means adding
one row to ``RESOLUTION_STEPS``.

    spelling            resolves to
    ------------------  ---------------------------
    string, boolean     SimpleType("string"), ...
    string[]            SimpleType("stringlist")
    Array<number>       SimpleType("numberlist")
    Color (enum)        SimpleType("Color")
    Address (record)    SimpleType("Address")
    Address[]           ArrayType("Address")  -> Addresslist
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .errors import UnresolvedTypeError
from .ir import (
    ArrayType,
    GrammarRule,
    PropertySpec,
    PropertyType,
    SimpleType,
    UnionType,
    alternation,
    context_of,
    reference,
)
from .registry import NUMBER, NUMBER_LIST, STRING, STRING_LIST

logger = logging.getLogger(__name__)

_ARRAY_PATTERN = re.compile(
    r"^(?:Array\s*<\s*(?P<generic>[A-Za-z_$][\w$]*)\s*>|(?P<suffix>[A-Za-z_$][\w$]*)\s*\[\s*\])$"
)

# Array spellings of scalars that map onto built-in list rules
SCALAR_LISTS = {STRING: STRING_LIST, NUMBER: NUMBER_LIST}


def array_element(spelling: str) -> str | None:
    """Return ``Foo`` for ``Foo[]`` or ``Array<Foo>``, None for anything else."""
    match = _ARRAY_PATTERN.match(spelling.strip())
    if not match:
        return None
    return match.group("generic") or match.group("suffix")


@dataclass(frozen=True)
class TypeResolver:
    """
    Resolves type spellings against the names visible to one compilation.

    Attributes:
        registry_names: Built-in rule names (scalars and scalar lists)
        record_names: Records declared by the schema
        enum_names: Enumerations declared by the schema
    """

    registry_names: frozenset[str]
    record_names: frozenset[str]
    enum_names: frozenset[str]

    @classmethod
    def create(
        cls,
        registry_names: Iterable[str],
        record_names: Iterable[str],
        enum_names: Iterable[str],
    ) -> TypeResolver:
        return cls(frozenset(registry_names), frozenset(record_names), frozenset(enum_names))

    def resolve_spelling(self, spelling: str) -> SimpleType | ArrayType | None:
        """Run one spelling through the decision table; None if no step claims it."""
        spelling = spelling.strip()
        for step in RESOLUTION_STEPS:
            resolved = step.apply(self, spelling)
            if resolved is not None:
                logger.debug("Resolved %r via %s", spelling, step.name)
                return resolved
        return None

    def resolve(self, record: str, prop: PropertySpec) -> PropertyType:
        """
        Resolve a property's declared type.

        Union members are resolved independently, in declared order.
        Repeated members are dropped; a union left with a single member
        resolves to that member.

        Raises:
            UnresolvedTypeError: If any spelling matches nothing
        """
        members: list[SimpleType | ArrayType] = []
        for spelling in prop.type.spellings:
            resolved = self.resolve_spelling(spelling)
            if resolved is None:
                raise UnresolvedTypeError(
                    record, prop.name, spelling, context_of(prop.location)
                )
            if resolved not in members:
                members.append(resolved)

        if len(members) == 1:
            return members[0]
        return UnionType(members=tuple(members))


@dataclass(frozen=True)
class ResolutionStep:
    """One row of the resolution decision table."""

    name: str
    apply: Callable[[TypeResolver, str], SimpleType | ArrayType | None]


def _registry_name(resolver: TypeResolver, spelling: str) -> SimpleType | None:
    if spelling in resolver.registry_names:
        return SimpleType(identifier=spelling)
    return None


def _scalar_list(resolver: TypeResolver, spelling: str) -> SimpleType | None:
    element = array_element(spelling)
    if element in SCALAR_LISTS:
        return SimpleType(identifier=SCALAR_LISTS[element])
    return None


def _enum_name(resolver: TypeResolver, spelling: str) -> SimpleType | None:
    if spelling in resolver.enum_names:
        return SimpleType(identifier=spelling)
    return None


def _record_name(resolver: TypeResolver, spelling: str) -> SimpleType | None:
    if spelling in resolver.record_names:
        return SimpleType(identifier=spelling)
    return None


def _record_array(resolver: TypeResolver, spelling: str) -> ArrayType | None:
    element = array_element(spelling)
    if element is not None and element in resolver.record_names:
        return ArrayType(record=element)
    return None


RESOLUTION_STEPS: tuple[ResolutionStep, ...] = (
    ResolutionStep("registry", _registry_name),
    ResolutionStep("scalar-list", _scalar_list),
    ResolutionStep("enum", _enum_name),
    ResolutionStep("record", _record_name),
    ResolutionStep("record-array", _record_array),
)


def list_identifier(record: str) -> str:
    """Name of the companion list element for ``record``."""
    return f"{record}list"


def type_rule(resolved: PropertyType) -> GrammarRule:
    """Grammar rule for the value slot of a resolved property type."""
    if isinstance(resolved, SimpleType):
        return reference(resolved.identifier)
    if isinstance(resolved, ArrayType):
        return reference(list_identifier(resolved.record))
    if isinstance(resolved, UnionType):
        return alternation(*(type_rule(member) for member in resolved.members))
    raise TypeError(f"Unknown property type: {resolved!r}")
