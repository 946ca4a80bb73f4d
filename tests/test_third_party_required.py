from __future__ import annotations

import json

import pytest
import sourcemap

from srcmap import original_position_for, parse_source_map
from srcmap.testing import generate_source_maps


# Independent decoder used as ground truth; it indexes lines from 0.
def _truth(text: str):
    return sourcemap.loads(text)


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_exact_positions_match_reference_decoder(seed: int) -> None:
    # Fully mapped segments with unique columns, so the reference index has no collisions.
    for text in generate_source_maps(seed=seed, count=60, unmapped=False):
        ours = parse_source_map(text)
        truth = _truth(text)
        for seg in ours.mappings:
            tok = truth.lookup(line=seg.generated_line - 1, column=seg.generated_column)
            r = original_position_for(ours, (seg.generated_line, seg.generated_column))
            assert r.source == tok.src
            assert r.line == tok.src_line + 1
            assert r.column == tok.src_col
            assert r.name == tok.name


@pytest.mark.parametrize("seed", [4, 5])
def test_between_positions_match_reference_decoder(seed: int) -> None:
    for text in generate_source_maps(seed=seed, count=60, unmapped=False):
        ours = parse_source_map(text)
        truth = _truth(text)
        segs = ours.mappings
        for a, b in zip(segs, segs[1:]):
            if a.generated_line != b.generated_line or b.generated_column - a.generated_column < 2:
                continue
            col = b.generated_column - 1
            tok = truth.lookup(line=a.generated_line - 1, column=col)
            r = original_position_for(ours, (a.generated_line, col))
            assert (r.source, r.line, r.column) == (tok.src, tok.src_line + 1, tok.src_col)


def test_reference_decoder_agrees_on_names_table() -> None:
    text = json.dumps(
        {
            "version": 3,
            "sources": ["src/app.js"],
            "sourcesContent": ["const x = 1;\nconst y = 2;\nconst z = 3;"],
            "names": ["x", "y", "z"],
            "mappings": "AAAAA,MAAMC,CAACC",
        }
    )
    ours = parse_source_map(text)
    truth = _truth(text)
    for seg in ours.mappings:
        tok = truth.lookup(line=0, column=seg.generated_column)
        r = original_position_for(ours, (1, seg.generated_column))
        assert r.name == tok.name
        assert r.column == tok.src_col
