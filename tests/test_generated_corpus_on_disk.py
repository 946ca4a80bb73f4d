from __future__ import annotations

from pathlib import Path

from srcmap import original_position_for, parse_file, parse_source_map
from srcmap.testing import generate_corpus_files


def test_generated_corpus_on_disk(tmp_path: Path) -> None:
    seed = 1
    count = 200

    corpus_dir = tmp_path / "corpus"
    corpus_dir.mkdir(parents=True, exist_ok=True)

    files = generate_corpus_files(seed=seed, count=count)
    assert files[0][0] == "case_000000.js.map"
    for rel, text in files:
        (corpus_dir / rel).write_text(text, encoding="utf-8")

    resolved = 0
    for rel, text in files:
        doc = parse_file(corpus_dir / rel)
        assert doc == parse_source_map(text)
        for seg in doc.mappings:
            r = original_position_for(doc, (seg.generated_line, seg.generated_column))
            if seg.source_index is None:
                continue
            resolved += 1
            assert r.source == doc.sources[seg.source_index]
            assert r.source_content == doc.content_at(seg.source_index)
            if r.source_content is not None:
                assert r.source_line() is not None
    # Sanity: the corpus is not trivially unmapped.
    assert resolved > count
