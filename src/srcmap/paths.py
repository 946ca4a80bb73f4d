from __future__ import annotations

import re


# "webpack://app/", "https://host/", "file:///" ... kept verbatim.
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://[^/]*/?")


def apply_source_root(source: str, source_root: str | None) -> str:
    if not source_root or _SCHEME_RE.match(source) or source.startswith("/"):
        return source
    if source_root.endswith("/"):
        return source_root + source
    return source_root + "/" + source


def canonicalize(path: str) -> str:
    """Collapse `.`/`..`/empty segments of a source path.

    A URL scheme prefix is kept as-is, as is a leading `/`. A `..` with nothing
    left to cancel is preserved, so `../lib/x.js` stays distinguishable from
    `lib/x.js`.
    """
    m = _SCHEME_RE.match(path)
    prefix = m.group(0) if m else ""
    rest = path[len(prefix):]
    if not prefix and rest.startswith("/"):
        prefix = "/"
        rest = rest.lstrip("/")

    out: list[str] = []
    for part in rest.split("/"):
        if part in ("", "."):
            continue
        if part == ".." and out and out[-1] != "..":
            out.pop()
            continue
        if part == ".." and prefix:
            # Cannot climb above a root or URL authority.
            continue
        out.append(part)
    return prefix + "/".join(out)


def normalize_source(source: str, source_root: str | None = None) -> str:
    return canonicalize(apply_source_root(source, source_root))
