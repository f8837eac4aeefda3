"""
Error types for schema parsing, grammar compilation, and serialization.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path


class TypeGrammarError(Exception):
    """Base exception for all typegrammar errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(TypeGrammarError):
    """
    Raised when schema source cannot be parsed.

    Examples:
    - Invalid syntax
    - Unsupported notation (optional members, inline object types)
    - Malformed declaration documents
    """


class ManifestError(TypeGrammarError):
    """Raised when a typegrammar.toml manifest is missing or invalid."""


class CompileError(TypeGrammarError):
    """Base class for errors raised while turning declarations into a grammar."""


class DuplicatePropertyError(CompileError):
    """A record declares the same property name twice."""

    def __init__(self, record: str, prop: str, context: ErrorContext | None = None):
        self.record = record
        self.prop = prop
        super().__init__(f"{record}: duplicate property '{prop}'", context)


class UnresolvedTypeError(CompileError):
    """A property type matches no scalar, enumeration, or record."""

    def __init__(
        self,
        record: str,
        prop: str,
        type_text: str,
        context: ErrorContext | None = None,
    ):
        self.record = record
        self.prop = prop
        self.type_text = type_text
        super().__init__(
            f"Failed resolving property {record}.{prop}: unsupported type {type_text}",
            context,
        )


class UnsupportedEnumMemberError(CompileError):
    """An enumeration member has no string literal value."""

    def __init__(self, enum: str, member: str, context: ErrorContext | None = None):
        self.enum = enum
        self.member = member
        super().__init__(
            f"{enum}.{member}: enumeration members must be initialized with a string literal",
            context,
        )


class EmptyEnumError(CompileError):
    """An enumeration declares no members."""

    def __init__(self, enum: str, context: ErrorContext | None = None):
        self.enum = enum
        super().__init__(f"{enum}: enumerations must declare at least one member", context)


class UnsupportedDeclarationError(CompileError):
    """A top-level declaration is neither a record nor an enumeration."""

    def __init__(self, kind: str, name: str | None = None, context: ErrorContext | None = None):
        self.kind = kind
        self.name = name
        label = f"{kind} '{name}'" if name else kind
        super().__init__(
            f"Unsupported declaration {label}: only interfaces and enums can be compiled",
            context,
        )


class ParameterizedTypeError(CompileError):
    """A record declares type parameters."""

    def __init__(
        self,
        record: str,
        parameters: Iterable[str],
        context: ErrorContext | None = None,
    ):
        self.record = record
        self.parameters = list(parameters)
        super().__init__(
            f"{record}: interfaces cannot have type parameters "
            f"(found <{', '.join(self.parameters)}>)",
            context,
        )


class UnknownRootTypeError(CompileError):
    """The requested root type is not a declared record."""

    def __init__(self, root: str, valid_names: Iterable[str]):
        self.root = root
        self.valid_names = sorted(valid_names)
        super().__init__(
            f"Root type '{root}' not found. Available interfaces: {self.valid_names}"
        )


class DuplicateElementError(CompileError):
    """Two grammar elements would share an identifier."""

    def __init__(self, identifiers: Iterable[str]):
        self.identifiers = sorted(set(identifiers))
        super().__init__(
            "Duplicate grammar rule names: "
            + ", ".join(self.identifiers)
            + " (declaration names must not collide with each other, "
            "with built-in rules, or with generated '<name>list' rules)"
        )


class SerializationError(TypeGrammarError):
    """Base class for errors raised while validating a grammar for output."""


class InvalidIdentifierError(SerializationError):
    """One or more rule names contain characters other than ASCII letters."""

    def __init__(self, identifiers: Iterable[str]):
        self.identifiers = list(identifiers)
        super().__init__(
            "Rule names must match pattern [a-zA-Z]+ and cannot contain special characters: "
            + ", ".join(repr(i) for i in self.identifiers)
        )


class DanglingReferenceError(SerializationError):
    """One or more rules reference identifiers that no element declares."""

    def __init__(self, references: Mapping[str, Iterable[str]]):
        self.references = {ref: sorted(set(users)) for ref, users in sorted(references.items())}
        lines = [
            f"  - {ref} (referenced by {', '.join(users)})"
            for ref, users in self.references.items()
        ]
        super().__init__("Invalid references in ruleset:\n" + "\n".join(lines))


@dataclass
class ErrorContext:
    """
    Where an error happened.

    ``source_line`` is the text of the offending line; when present the
    formatted context shows it with a caret under ``column``.
    """

    file: Path
    line: int
    column: int
    source_line: str | None = None

    def format(self) -> str:
        location = f"{self.file}:{self.line}:{self.column}"
        if self.source_line is None:
            return location
        caret = " " * (self.column - 1) + "^"
        return f"{location}\n    {self.source_line}\n    {caret}"


def source_line(text: str, line: int) -> str | None:
    """Return line ``line`` (1-indexed) of ``text``, or None past the end."""
    lines = text.split("\n")
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return None


def make_parse_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    text: str | None = None,
) -> ParseError:
    """Create a ParseError located at ``file:line:column``, quoting ``text`` when given."""
    quoted = source_line(text, line) if text else None
    context = ErrorContext(file=file, line=line, column=column, source_line=quoted)
    return ParseError(message, context)
