"""Source location tracking for IR nodes.

Records the file, line, and column where a declaration was defined,
enabling source-mapped compile errors.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from ..errors import ErrorContext


class SourceLocation(BaseModel):
    """Source position where a declaration was defined.

    Attributes:
        file: Path to the schema file (relative or absolute)
        line: 1-indexed line number
        column: 1-indexed column number
    """

    file: str
    line: int
    column: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"

    def to_context(self) -> ErrorContext:
        return ErrorContext(file=Path(self.file), line=self.line, column=self.column)


def context_of(location: SourceLocation | None) -> ErrorContext | None:
    """Return an ErrorContext for ``location``, or None when it is unknown."""
    return location.to_context() if location is not None else None
