from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field

from .model import MappingSegment, ResolvedPosition, UNRESOLVED


@dataclass(frozen=True, slots=True)
class _LineIndex:
    columns: tuple[int, ...]
    segments: tuple[MappingSegment, ...]

    def lookup(self, column: int) -> MappingSegment | None:
        i = bisect_right(self.columns, column)
        if i == 0:
            return None
        j = i - 1
        # Several segments may share a column; the earliest one in file order wins.
        while j > 0 and self.columns[j - 1] == self.columns[j]:
            j -= 1
        return self.segments[j]


def _build_line_index(mappings: tuple[MappingSegment, ...]) -> dict[int, _LineIndex]:
    by_line: dict[int, list[MappingSegment]] = {}
    for seg in mappings:
        by_line.setdefault(seg.generated_line, []).append(seg)
    out: dict[int, _LineIndex] = {}
    for line, segs in by_line.items():
        # sorted() is stable, so duplicates keep their file order.
        ordered = sorted(segs, key=lambda s: s.generated_column)
        out[line] = _LineIndex(
            columns=tuple(s.generated_column for s in ordered),
            segments=tuple(ordered),
        )
    return out


@dataclass(frozen=True, slots=True)
class SourceMapDocument:
    version: int
    sources: tuple[str, ...]
    names: tuple[str, ...]
    mappings: tuple[MappingSegment, ...]
    sources_content: tuple[str | None, ...] | None = None
    file: str | None = None
    source_root: str | None = None
    # Source paths as written in the map, before canonicalisation.
    raw_sources: tuple[str, ...] = ()

    _lines: dict[int, _LineIndex] = field(init=False, repr=False, compare=False)
    _source_ids: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.sources_content is not None and len(self.sources_content) != len(self.sources):
            raise ValueError("sources_content must be aligned with sources")
        object.__setattr__(self, "_lines", _build_line_index(self.mappings))
        ids: dict[str, int] = {}
        for i, src in enumerate(self.sources):
            ids.setdefault(src, i)
        for i, src in enumerate(self.raw_sources):
            ids.setdefault(src, i)
        object.__setattr__(self, "_source_ids", ids)

    def segment_for(self, line: int, column: int) -> MappingSegment | None:
        idx = self._lines.get(line)
        if idx is None:
            return None
        return idx.lookup(column)

    def resolve(self, line: int, column: int) -> ResolvedPosition:
        seg = self.segment_for(line, column)
        if seg is None or seg.source_index is None:
            return UNRESOLVED
        return ResolvedPosition(
            source=self.sources[seg.source_index],
            line=seg.original_line,
            column=seg.original_column,
            name=self.names[seg.name_index] if seg.name_index is not None else None,
            source_content=self.content_at(seg.source_index),
        )

    def content_at(self, index: int) -> str | None:
        if self.sources_content is None:
            return None
        return self.sources_content[index]

    def source_index(self, source: str) -> int | None:
        return self._source_ids.get(source)
