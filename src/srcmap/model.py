from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MappingSegment:
    """One decoded entry of the `mappings` field.

    Generated and original lines are 1-based, columns are 0-based.
    """

    generated_line: int
    generated_column: int
    source_index: int | None = None
    original_line: int | None = None
    original_column: int | None = None
    name_index: int | None = None

    def __post_init__(self) -> None:
        if self.source_index is not None and (self.original_line is None or self.original_column is None):
            raise ValueError("a segment with a source needs an original line and column")


@dataclass(frozen=True, slots=True)
class PositionQuery:
    line: int  # 1-based
    column: int  # 0-based


@dataclass(frozen=True, slots=True)
class ResolvedPosition:
    source: str | None = None
    line: int | None = None
    column: int | None = None
    name: str | None = None
    source_content: str | None = None

    @property
    def found(self) -> bool:
        return self.source is not None

    def source_line(self) -> str | None:
        """Text of the original line, when the source content is embedded."""
        if self.source_content is None or self.line is None:
            return None
        lines = self.source_content.split("\n")
        if not 1 <= self.line <= len(lines):
            return None
        return lines[self.line - 1].rstrip("\r")

    def format(self) -> str:
        if not self.found:
            return "<unmapped>"
        loc = f"{self.source}:{self.line}:{self.column}"
        if self.name:
            return f"{loc} ({self.name})"
        return loc


UNRESOLVED = ResolvedPosition()
