"""
Schema declaration types.

Declarations are what a front-end hands to the compiler: records (named
composite types with ordered, typed properties), enumerations of string
literals, and any other top-level construct the front-end saw but the
compiler cannot handle.

Example (front-end notation):

    enum Color { RED = "red", BLUE = "blue" }

    interface Car {
      make: string;
      colors: string[];
      paint: Color | string;
      owners: Array<Owner>;
    }
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .location import SourceLocation

# =============================================================================
# Unresolved type expressions
# =============================================================================


class TypeExpr(BaseModel):
    """
    A property's declared type, as spelled in the source.

    One spelling is a plain type; several spellings are the alternatives of a
    union, in declared order. Spellings are matched textually by the type
    resolver, e.g. ``"string"``, ``"Address"``, ``"Address[]"``,
    ``"Array<number>"``.

    Accepts a bare string when validated from documents, so
    ``{"type": "string | number"}`` is equivalent to
    ``{"type": {"spellings": ["string", "number"]}}``.
    """

    spellings: list[str] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def from_text(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"spellings": [part.strip() for part in data.split("|") if part.strip()]}
        if isinstance(data, list):
            return {"spellings": data}
        return data

    @classmethod
    def of(cls, *spellings: str) -> TypeExpr:
        return cls(spellings=list(spellings))

    @property
    def text(self) -> str:
        return " | ".join(self.spellings)

    def __str__(self) -> str:
        return self.text


# =============================================================================
# Resolved property types
# =============================================================================


class SimpleType(BaseModel):
    """A reference to a single grammar element (scalar, enum, record, scalar list)."""

    kind: Literal["simple"] = "simple"
    identifier: str

    model_config = ConfigDict(frozen=True)


class ArrayType(BaseModel):
    """An array whose elements are objects of the named record."""

    kind: Literal["array"] = "array"
    record: str

    model_config = ConfigDict(frozen=True)


UnionMember = Annotated[SimpleType | ArrayType, Field(discriminator="kind")]


class UnionType(BaseModel):
    """
    Alternatives for one property slot, in declared order.

    Members are simple or array types only, so unions never nest.
    """

    kind: Literal["union"] = "union"
    members: tuple[UnionMember, ...] = Field(min_length=2)

    model_config = ConfigDict(frozen=True)


PropertyType = Annotated[SimpleType | ArrayType | UnionType, Field(discriminator="kind")]


# =============================================================================
# Declarations
# =============================================================================


class PropertySpec(BaseModel):
    """A named, typed property of a record."""

    name: str
    type: TypeExpr
    location: SourceLocation | None = None

    model_config = ConfigDict(frozen=True)


class RecordSpec(BaseModel):
    """
    A record (interface) declaration.

    Attributes:
        name: Record identifier, also the grammar element name
        properties: Ordered properties; serialized in this order
        type_parameters: Generic parameters; must be empty to compile
        location: Where the front-end found the declaration
    """

    kind: Literal["record"] = "record"
    name: str
    properties: list[PropertySpec] = Field(default_factory=list)
    type_parameters: list[str] = Field(default_factory=list)
    location: SourceLocation | None = None

    model_config = ConfigDict(frozen=True)


class EnumMemberSpec(BaseModel):
    """
    A single enumeration member.

    ``value`` is the string literal the member stands for. It is None when
    the member has no initializer or a non-string one; ``initializer`` keeps
    the source text of such initializers for diagnostics.
    """

    name: str
    value: str | None = None
    initializer: str | None = None

    model_config = ConfigDict(frozen=True)


class EnumSpec(BaseModel):
    """A named closed set of string literal values."""

    kind: Literal["enum"] = "enum"
    name: str
    members: list[EnumMemberSpec] = Field(default_factory=list)
    location: SourceLocation | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def values(self) -> list[str | None]:
        return [member.value for member in self.members]


class OtherDeclSpec(BaseModel):
    """A top-level declaration of a kind the compiler does not support."""

    kind: Literal["other"] = "other"
    declaration_kind: str
    name: str | None = None
    location: SourceLocation | None = None

    model_config = ConfigDict(frozen=True)


Declaration = Annotated[RecordSpec | EnumSpec | OtherDeclSpec, Field(discriminator="kind")]


class SchemaSpec(BaseModel):
    """
    The ordered top-level declarations of one schema.

    Together with a root type name, this is the complete input to one
    compilation.
    """

    declarations: list[Declaration] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def records(self) -> list[RecordSpec]:
        return [d for d in self.declarations if isinstance(d, RecordSpec)]

    @property
    def enums(self) -> list[EnumSpec]:
        return [d for d in self.declarations if isinstance(d, EnumSpec)]

    @property
    def record_names(self) -> set[str]:
        return {r.name for r in self.records}

    @property
    def enum_names(self) -> set[str]:
        return {e.name for e in self.enums}

    def merged_with(self, other: SchemaSpec) -> SchemaSpec:
        """Return a schema with this schema's declarations followed by ``other``'s."""
        return SchemaSpec(declarations=[*self.declarations, *other.declarations])
