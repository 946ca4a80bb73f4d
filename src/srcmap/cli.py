from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from .api import original_positions_for, parse_file
from .errors import SourceMapError
from .model import PositionQuery


log = logging.getLogger(__name__)


def _position(text: str) -> PositionQuery:
    line_s, sep, col_s = text.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected LINE:COLUMN, got {text!r}")
    try:
        return PositionQuery(line=int(line_s), column=int(col_s))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected integers in LINE:COLUMN, got {text!r}") from None


def _cmd_resolve(args: argparse.Namespace) -> int:
    doc = parse_file(args.map, source_root=args.source_root)
    results = original_positions_for(doc, args.positions)
    if args.json:
        payload = []
        for q, r in zip(args.positions, results):
            item = {"generated": {"line": q.line, "column": q.column}, **asdict(r)}
            if not args.with_content:
                item.pop("source_content")
            item["code_line"] = r.source_line()
            payload.append(item)
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    for q, r in zip(args.positions, results):
        if not r.found:
            print(f"{q.line}:{q.column} -> no mapping")
            continue
        print(f"{q.line}:{q.column} -> {r.format()}")
        code = r.source_line()
        if code is not None:
            print(f"    {code}")
    return 0


def _cmd_segments(args: argparse.Namespace) -> int:
    doc = parse_file(args.map, source_root=args.source_root)
    if args.json:
        print(json.dumps([asdict(s) for s in doc.mappings], indent=2))
        return 0
    for s in doc.mappings:
        gen = f"{s.generated_line}:{s.generated_column}"
        if s.source_index is None:
            print(gen)
            continue
        orig = f"{doc.sources[s.source_index]}:{s.original_line}:{s.original_column}"
        name = f" {doc.names[s.name_index]}" if s.name_index is not None else ""
        print(f"{gen} -> {orig}{name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="srcmap", description="Resolve positions through source maps")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("map", help="Path to a .map file")
    common.add_argument("--source-root", default=None, help="Override the map's sourceRoot")
    common.add_argument("--json", action="store_true", help="Print results as JSON")

    rp = sub.add_parser("resolve", parents=[common], help="Resolve generated positions")
    rp.add_argument(
        "positions",
        nargs="+",
        type=_position,
        metavar="LINE:COLUMN",
        help="Generated position, 1-based line and 0-based column (repeatable)",
    )
    rp.add_argument(
        "--with-content",
        action="store_true",
        help="Include the full embedded source text in JSON output",
    )
    rp.set_defaults(func=_cmd_resolve)

    sp = sub.add_parser("segments", parents=[common], help="List decoded mapping segments")
    sp.set_defaults(func=_cmd_segments)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        return args.func(args)
    except SourceMapError as e:
        log.debug("failed to process %s", args.map, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
