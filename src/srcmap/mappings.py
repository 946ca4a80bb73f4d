from __future__ import annotations

from collections.abc import Iterable

from .errors import MalformedMapError
from .model import MappingSegment
from .vlq import decode_vlq, encode_vlq_values


def decode_mappings(mappings: str, *, source_count: int, name_count: int) -> list[MappingSegment]:
    """Decode a v3 `mappings` string into segments in file order.

    Source and original positions carry over between generated lines; only
    the generated column counter restarts at every `;`.
    """
    segments: list[MappingSegment] = []
    source = 0
    orig_line = 0
    orig_col = 0
    name = 0

    line_start = 0
    for gen_line, group in enumerate(mappings.split(";"), start=1):
        gen_col = 0
        seg_start = line_start
        for raw in group.split(","):
            seg_end = seg_start + len(raw)
            if not raw:
                seg_start = seg_end + 1
                continue
            index = len(segments)
            try:
                fields = decode_vlq(mappings, start=seg_start, end=seg_end)
            except MalformedMapError as e:
                e.segment = index
                raise
            n = len(fields)
            if n not in (1, 4, 5):
                raise MalformedMapError(
                    f"segment has {n} fields, expected 1, 4 or 5",
                    offset=seg_start,
                    segment=index,
                )

            gen_col += fields[0]
            if gen_col < 0:
                raise MalformedMapError("negative generated column", offset=seg_start, segment=index)
            if n == 1:
                segments.append(MappingSegment(generated_line=gen_line, generated_column=gen_col))
                seg_start = seg_end + 1
                continue

            source += fields[1]
            orig_line += fields[2]
            orig_col += fields[3]
            if not 0 <= source < source_count:
                raise MalformedMapError(
                    f"source index {source} out of range (sources has {source_count} entries)",
                    offset=seg_start,
                    segment=index,
                )
            if orig_line < 0 or orig_col < 0:
                raise MalformedMapError("negative original position", offset=seg_start, segment=index)

            name_index: int | None = None
            if n == 5:
                name += fields[4]
                if not 0 <= name < name_count:
                    raise MalformedMapError(
                        f"name index {name} out of range (names has {name_count} entries)",
                        offset=seg_start,
                        segment=index,
                    )
                name_index = name

            segments.append(
                MappingSegment(
                    generated_line=gen_line,
                    generated_column=gen_col,
                    source_index=source,
                    original_line=orig_line + 1,
                    original_column=orig_col,
                    name_index=name_index,
                )
            )
            seg_start = seg_end + 1
        line_start += len(group) + 1
    return segments


def encode_mappings(segments: Iterable[MappingSegment]) -> str:
    """Encode segments back into a `mappings` string.

    Segments must be ordered by generated line; within a line they are
    written in the given order, so duplicates keep their relative order.
    """
    lines: list[list[str]] = []
    prev_col = 0
    prev_source = 0
    prev_line = 0
    prev_orig_col = 0
    prev_name = 0

    for seg in segments:
        if seg.generated_line < len(lines):
            raise ValueError(
                f"segments out of order: line {seg.generated_line} after line {len(lines)}"
            )
        while len(lines) < seg.generated_line:
            lines.append([])
            prev_col = 0

        fields = [seg.generated_column - prev_col]
        prev_col = seg.generated_column
        if seg.source_index is not None:
            orig_line = seg.original_line - 1
            fields += [
                seg.source_index - prev_source,
                orig_line - prev_line,
                seg.original_column - prev_orig_col,
            ]
            prev_source = seg.source_index
            prev_line = orig_line
            prev_orig_col = seg.original_column
            if seg.name_index is not None:
                fields.append(seg.name_index - prev_name)
                prev_name = seg.name_index
        lines[-1].append(encode_vlq_values(fields))

    return ";".join(",".join(line) for line in lines)
