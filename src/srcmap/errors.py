from __future__ import annotations

from dataclasses import dataclass


class SourceMapError(Exception):
    """Base class for every error raised by srcmap."""


@dataclass(slots=True)
class MalformedMapError(SourceMapError):
    """The source map text is structurally invalid.

    `offset` is a character offset into the `mappings` string, or into the raw
    text when the JSON itself could not be decoded. `segment` is the 0-based
    index of the offending segment in file order.
    """

    message: str
    offset: int | None = None
    segment: int | None = None
    file: str | None = None
    hint: str | None = None

    def location(self) -> str:
        parts: list[str] = []
        if self.file:
            parts.append(self.file)
        if self.segment is not None:
            parts.append(f"segment {self.segment}")
        if self.offset is not None:
            parts.append(f"offset {self.offset}")
        return ", ".join(parts)

    def __str__(self) -> str:
        loc = self.location()
        base = f"{loc}: {self.message}" if loc else self.message
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base


@dataclass(slots=True)
class InvalidQueryError(SourceMapError):
    message: str
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        if self.line is None and self.column is None:
            return self.message
        return f"{self.line}:{self.column}: {self.message}"
