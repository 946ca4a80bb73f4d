from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .document import SourceMapDocument
from .errors import InvalidQueryError, MalformedMapError
from .mappings import decode_mappings
from .model import MappingSegment, PositionQuery, ResolvedPosition
from .paths import normalize_source


log = logging.getLogger(__name__)

_XSSI_PREFIX = ")]}'"

Query = PositionQuery | tuple[int, int]


def parse_source_map(
    text: str,
    *,
    file: str | None = None,
    source_root: str | None = None,
) -> SourceMapDocument:
    """Parse source map v3 text into an immutable, queryable document.

    `file` is only used to label errors. `source_root` replaces the map's own
    `sourceRoot` when given.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    if text.startswith(_XSSI_PREFIX):
        nl = text.find("\n")
        text = "" if nl < 0 else text[nl + 1 :]

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedMapError(f"invalid JSON: {e.msg}", offset=e.pos, file=file) from e
    except RecursionError as e:
        raise MalformedMapError("JSON nesting too deep", file=file) from e

    try:
        if isinstance(data, dict) and "sections" in data:
            doc = _parse_indexed(data, source_root=source_root)
        else:
            doc = _parse_object(data, source_root=source_root)
    except MalformedMapError as e:
        if e.file is None:
            e.file = file
        raise

    log.debug(
        "parsed source map %s: %d sources, %d names, %d segments",
        file or "<memory>",
        len(doc.sources),
        len(doc.names),
        len(doc.mappings),
    )
    return doc


def parse_file(path: str | Path, *, source_root: str | None = None) -> SourceMapDocument:
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedMapError(f"invalid UTF-8: {e.reason}", offset=e.start, file=str(p)) from e
    return parse_source_map(text, file=str(p), source_root=source_root)


def _check_version(data: dict[str, Any]) -> None:
    if "version" not in data:
        raise MalformedMapError("missing version", hint='add "version": 3')
    v = data["version"]
    if isinstance(v, bool) or not isinstance(v, int) or v != 3:
        raise MalformedMapError(f"unsupported source map version {v!r}", hint="only version 3 is supported")


def _string_list(data: dict[str, Any], key: str, *, required: bool) -> list[str]:
    if key not in data:
        if required:
            raise MalformedMapError(f"missing {key!r}")
        return []
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
        raise MalformedMapError(f"{key!r} must be a list of strings")
    return value


def _optional_string(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise MalformedMapError(f"{key!r} must be a string")
    return value


def _parse_object(data: Any, *, source_root: str | None) -> SourceMapDocument:
    if not isinstance(data, dict):
        raise MalformedMapError("source map must be a JSON object")
    _check_version(data)

    raw_sources = _string_list(data, "sources", required=True)
    names = _string_list(data, "names", required=False)

    mappings = data.get("mappings")
    if not isinstance(mappings, str):
        raise MalformedMapError("'mappings' must be a string")

    content: tuple[str | None, ...] | None = None
    if data.get("sourcesContent") is not None:
        sc = data["sourcesContent"]
        if not isinstance(sc, list) or not all(x is None or isinstance(x, str) for x in sc):
            raise MalformedMapError("'sourcesContent' must be a list of strings or nulls")
        if len(sc) != len(raw_sources):
            raise MalformedMapError(
                f"'sourcesContent' has {len(sc)} entries but 'sources' has {len(raw_sources)}",
                hint="sourcesContent must be index-aligned with sources",
            )
        content = tuple(sc)

    root = source_root if source_root is not None else _optional_string(data, "sourceRoot")
    segments = decode_mappings(mappings, source_count=len(raw_sources), name_count=len(names))

    return SourceMapDocument(
        version=3,
        sources=tuple(normalize_source(s, root) for s in raw_sources),
        names=tuple(names),
        mappings=tuple(segments),
        sources_content=content,
        file=_optional_string(data, "file"),
        source_root=root,
        raw_sources=tuple(raw_sources),
    )


def _section_offset(section: Any, i: int) -> tuple[int, int]:
    if not isinstance(section, dict):
        raise MalformedMapError(f"section {i} must be a JSON object")
    off = section.get("offset")
    if not isinstance(off, dict):
        raise MalformedMapError(f"section {i} has no offset")
    line, column = off.get("line"), off.get("column")
    if not isinstance(line, int) or not isinstance(column, int) or line < 0 or column < 0:
        raise MalformedMapError(f"section {i} offset must hold non-negative integer line and column")
    return line, column


def _parse_indexed(data: dict[str, Any], *, source_root: str | None) -> SourceMapDocument:
    """Flatten an indexed map (one carrying `sections`) into a single document."""
    _check_version(data)
    sections = data["sections"]
    if not isinstance(sections, list):
        raise MalformedMapError("'sections' must be a list")

    sources: list[str] = []
    raw_sources: list[str] = []
    names: list[str] = []
    contents: list[str | None] = []
    any_content = False
    segments: list[MappingSegment] = []
    prev_offset: tuple[int, int] | None = None

    for i, section in enumerate(sections):
        off_line, off_col = _section_offset(section, i)
        if prev_offset is not None and (off_line, off_col) <= prev_offset:
            raise MalformedMapError(f"section {i} offset is not after the previous section")
        if segments:
            last = segments[-1]
            if (last.generated_line, last.generated_column) >= (off_line + 1, off_col):
                raise MalformedMapError(f"section {i - 1} overlaps section {i}")
        prev_offset = (off_line, off_col)

        if "url" in section:
            raise MalformedMapError(f"section {i} references a url", hint="inline the map under 'map'")
        sub = section.get("map")
        if isinstance(sub, dict) and "sections" in sub:
            raise MalformedMapError(f"section {i} nests another indexed map")
        try:
            doc = _parse_object(sub, source_root=source_root)
        except MalformedMapError as e:
            e.message = f"section {i}: {e.message}"
            raise

        src_base, name_base = len(sources), len(names)
        for seg in doc.mappings:
            col = seg.generated_column + (off_col if seg.generated_line == 1 else 0)
            segments.append(
                MappingSegment(
                    generated_line=seg.generated_line + off_line,
                    generated_column=col,
                    source_index=None if seg.source_index is None else seg.source_index + src_base,
                    original_line=seg.original_line,
                    original_column=seg.original_column,
                    name_index=None if seg.name_index is None else seg.name_index + name_base,
                )
            )
        sources.extend(doc.sources)
        raw_sources.extend(doc.raw_sources)
        names.extend(doc.names)
        if doc.sources_content is not None:
            any_content = True
            contents.extend(doc.sources_content)
        else:
            contents.extend([None] * len(doc.sources))

    return SourceMapDocument(
        version=3,
        sources=tuple(sources),
        names=tuple(names),
        mappings=tuple(segments),
        sources_content=tuple(contents) if any_content else None,
        file=_optional_string(data, "file"),
        raw_sources=tuple(raw_sources),
    )


def _as_query(query: Query) -> PositionQuery:
    if isinstance(query, PositionQuery):
        q = query
    else:
        if len(query) != 2:
            raise InvalidQueryError(f"expected a (line, column) pair, got {query!r}")
        line, column = query
        q = PositionQuery(line=line, column=column)
    for v in (q.line, q.column):
        if isinstance(v, bool) or not isinstance(v, int):
            raise InvalidQueryError("line and column must be integers", line=q.line, column=q.column)
    if q.line < 1:
        raise InvalidQueryError("generated line is 1-based and must be >= 1", line=q.line, column=q.column)
    if q.column < 0:
        raise InvalidQueryError("generated column must be >= 0", line=q.line, column=q.column)
    return q


def original_position_for(doc: SourceMapDocument, query: Query) -> ResolvedPosition:
    """Map a generated position back to its original position.

    Uses the nearest segment at or before the column on the same generated
    line. An unmapped position is not an error: every field of the result is
    None.
    """
    q = _as_query(query)
    return doc.resolve(q.line, q.column)


def original_positions_for(doc: SourceMapDocument, queries: Iterable[Query]) -> list[ResolvedPosition]:
    return [original_position_for(doc, q) for q in queries]


def source_content_for(doc: SourceMapDocument, source: str) -> str | None:
    i = doc.source_index(source)
    if i is None:
        return None
    return doc.content_at(i)
