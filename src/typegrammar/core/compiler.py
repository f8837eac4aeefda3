"""
Per-declaration compilers.

Records become an object element plus a companion list element;
enumerations become a single element with one quoted-literal alternative
per member.

Record ``Address { street: string; zip: number }`` compiles to:

    Address ::= "{" ws "\\"street\\":" ws string "," ws "\\"zip\\":" ws number "}"
    Addresslist ::= "[]" | "[" ws Address ("," ws Address)* "]"
"""

from __future__ import annotations

import json
import logging

from .errors import (
    DuplicatePropertyError,
    EmptyEnumError,
    ParameterizedTypeError,
    UnsupportedEnumMemberError,
)
from .ir import (
    EnumSpec,
    GrammarElement,
    GrammarRule,
    RecordSpec,
    context_of,
    literal,
    reference,
    sequence,
    star,
)
from .registry import WS_REF
from .resolver import TypeResolver, list_identifier, type_rule

logger = logging.getLogger(__name__)


def quoted(value: str) -> str:
    """JSON text of a string value, e.g. ``street`` -> ``"street"``."""
    return json.dumps(value, ensure_ascii=False)


def compile_record(
    record: RecordSpec, resolver: TypeResolver
) -> tuple[GrammarElement, GrammarElement]:
    """
    Compile a record into its object element and its list element.

    Args:
        record: Record declaration
        resolver: Resolver for the names visible to this compilation

    Returns:
        (object element, list element)

    Raises:
        ParameterizedTypeError: If the record declares type parameters
        DuplicatePropertyError: If a property name repeats
        UnresolvedTypeError: If any property type cannot be resolved
    """
    context = context_of(record.location)
    if record.type_parameters:
        raise ParameterizedTypeError(record.name, record.type_parameters, context)

    seen: set[str] = set()
    for prop in record.properties:
        if prop.name in seen:
            raise DuplicatePropertyError(record.name, prop.name, context_of(prop.location))
        seen.add(prop.name)

    rules: list[GrammarRule] = [literal("{")]
    for index, prop in enumerate(record.properties):
        if index:
            rules.append(literal(","))
        rules.extend(
            [
                WS_REF,
                literal(f"{quoted(prop.name)}:"),
                WS_REF,
                type_rule(resolver.resolve(record.name, prop)),
            ]
        )
    rules.append(literal("}"))

    object_element = GrammarElement(identifier=record.name, alternatives=(sequence(*rules),))

    object_ref = reference(record.name)
    list_element = GrammarElement(
        identifier=list_identifier(record.name),
        alternatives=(
            literal("[]"),
            sequence(
                literal("["),
                WS_REF,
                object_ref,
                star(literal(","), WS_REF, object_ref),
                literal("]"),
            ),
        ),
    )

    logger.debug(
        "Compiled record %s (%d properties)", record.name, len(record.properties)
    )
    return object_element, list_element


def compile_enum(enum: EnumSpec) -> GrammarElement:
    """
    Compile an enumeration into one element of quoted literal alternatives.

    Members keep their declared order; repeated values produce repeated
    alternatives.

    Raises:
        UnsupportedEnumMemberError: If a member has no string literal value
        EmptyEnumError: If the enumeration has no members
    """
    context = context_of(enum.location)
    if not enum.members:
        raise EmptyEnumError(enum.name, context)

    alternatives: list[GrammarRule] = []
    for member in enum.members:
        if member.value is None:
            raise UnsupportedEnumMemberError(enum.name, member.name, context)
        alternatives.append(literal(quoted(member.value)))

    logger.debug("Compiled enum %s (%d members)", enum.name, len(enum.members))
    return GrammarElement(identifier=enum.name, alternatives=tuple(alternatives))
