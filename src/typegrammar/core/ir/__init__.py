"""
typegrammar Intermediate Representation (IR) types.

Schema declarations (the compiler's input) and grammar productions (its
output). All types are re-exported from this package.
"""

# Grammar productions
from .grammar import (
    ROOT_IDENTIFIER,
    AlternationRule,
    CharClassRule,
    Grammar,
    GrammarElement,
    GrammarRule,
    GroupRule,
    LiteralRule,
    ReferenceRule,
    SequenceRule,
    alternation,
    char_class,
    iter_references,
    literal,
    reference,
    sequence,
    star,
)

# Source locations
from .location import SourceLocation, context_of

# Schema declarations
from .schema import (
    ArrayType,
    Declaration,
    EnumMemberSpec,
    EnumSpec,
    OtherDeclSpec,
    PropertySpec,
    PropertyType,
    RecordSpec,
    SchemaSpec,
    SimpleType,
    TypeExpr,
    UnionMember,
    UnionType,
)

__all__ = [
    # Grammar
    "ROOT_IDENTIFIER",
    "AlternationRule",
    "CharClassRule",
    "Grammar",
    "GrammarElement",
    "GrammarRule",
    "GroupRule",
    "LiteralRule",
    "ReferenceRule",
    "SequenceRule",
    "alternation",
    "char_class",
    "iter_references",
    "literal",
    "reference",
    "sequence",
    "star",
    # Locations
    "SourceLocation",
    "context_of",
    # Schema
    "ArrayType",
    "Declaration",
    "EnumMemberSpec",
    "EnumSpec",
    "OtherDeclSpec",
    "PropertySpec",
    "PropertyType",
    "RecordSpec",
    "SchemaSpec",
    "SimpleType",
    "TypeExpr",
    "UnionMember",
    "UnionType",
]
