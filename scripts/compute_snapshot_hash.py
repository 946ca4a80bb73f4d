from __future__ import annotations

import argparse
import hashlib

from srcmap import dump_source_map, original_position_for, parse_source_map


def _generate(seed: int, count: int) -> list[str]:
    from srcmap.testing import generate_source_maps

    return generate_source_maps(seed=seed, count=count)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="compute_snapshot_hash")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=1000)
    args = ap.parse_args(argv)

    h = hashlib.sha256()
    for i, text in enumerate(_generate(args.seed, args.count)):
        doc1 = parse_source_map(text, file=f"snapshot:{args.seed}:{i}.map")
        out1 = dump_source_map(doc1)
        doc2 = parse_source_map(out1, file=f"snapshot:{args.seed}:{i}.map")
        out2 = dump_source_map(doc2)
        if out2 != out1:
            raise SystemExit(f"non-idempotent dump at case {i}")
        for seg in doc1.mappings:
            q = (seg.generated_line, seg.generated_column)
            r = original_position_for(doc1, q)
            if r != original_position_for(doc2, q):
                raise SystemExit(f"resolution changed after dump at case {i}, position {q}")
            h.update(f"{q}={r.format()}\n".encode("utf-8"))
        h.update(out2.encode("utf-8"))
        h.update(b"\n---\n")

    print(h.hexdigest())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
