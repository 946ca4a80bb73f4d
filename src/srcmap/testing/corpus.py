from __future__ import annotations

import json
import random
import string

from ..mappings import encode_mappings
from ..model import MappingSegment


_DIRS = ["src", "src/components", "lib", "node_modules/vendor", "app/views"]
_EXTS = [".js", ".ts", ".vue", ".jsx"]
_SOURCE_LINES = 40


def _ident(r: random.Random) -> str:
    head = r.choice(string.ascii_letters + "_$")
    tail = "".join(r.choice(string.ascii_letters + string.digits + "_") for _ in range(r.randint(0, 10)))
    return head + tail


def _source_text(r: random.Random, names: list[str]) -> str:
    lines = []
    for i in range(_SOURCE_LINES):
        ident = r.choice(names) if names else f"v{i}"
        lines.append(f"const {ident}_{i} = {r.randint(0, 999)};")
    return "\n".join(lines) + "\n"


def generate_segments(
    r: random.Random,
    *,
    source_count: int,
    name_count: int,
    lines: int,
    unmapped: bool = True,
    duplicates: bool = False,
) -> list[MappingSegment]:
    """Random segments in file order, columns non-decreasing within a line.

    With `duplicates` some segments repeat the previous column; otherwise
    columns are strictly increasing.
    """
    out: list[MappingSegment] = []
    for line in range(1, lines + 1):
        col = r.randint(0, 20)
        for k in range(r.randint(0, 6)):
            if k:
                col += 0 if duplicates and r.random() < 0.2 else r.randint(1, 40)
            if source_count == 0 or (unmapped and r.random() < 0.15):
                out.append(MappingSegment(generated_line=line, generated_column=col))
                continue
            name = r.randrange(name_count) if name_count and r.random() < 0.4 else None
            out.append(
                MappingSegment(
                    generated_line=line,
                    generated_column=col,
                    source_index=r.randrange(source_count),
                    original_line=r.randint(1, _SOURCE_LINES),
                    original_column=r.randint(0, 60),
                    name_index=name,
                )
            )
    return out


def _gen_one(r: random.Random, *, unmapped: bool, duplicates: bool) -> str:
    source_count = r.randint(1, 5)
    names = [_ident(r) for _ in range(r.randint(0, 6))]
    sources = [f"{r.choice(_DIRS)}/{_ident(r)}{r.choice(_EXTS)}" for _ in range(source_count)]
    segments = generate_segments(
        r,
        source_count=source_count,
        name_count=len(names),
        lines=r.randint(1, 12),
        unmapped=unmapped,
        duplicates=duplicates,
    )
    data: dict[str, object] = {
        "version": 3,
        "file": "bundle.js",
        "sources": sources,
        "names": names,
        "mappings": encode_mappings(segments),
    }
    if r.random() < 0.7:
        data["sourcesContent"] = [_source_text(r, names) if r.random() < 0.8 else None for _ in sources]
    return json.dumps(data)


def generate_source_maps(
    *,
    seed: int,
    count: int,
    unmapped: bool = True,
    duplicates: bool = False,
) -> list[str]:
    r = random.Random(seed)
    return [_gen_one(r, unmapped=unmapped, duplicates=duplicates) for _ in range(count)]


def generate_corpus_files(*, seed: int, count: int) -> list[tuple[str, str]]:
    """Generate a deterministic corpus as a file set of (relative_path, map_text).

    File names are stable: `case_000000.js.map`, ...
    """
    maps = generate_source_maps(seed=seed, count=count)
    return [(f"case_{i:06d}.js.map", text) for i, text in enumerate(maps)]
