from __future__ import annotations

import json
from typing import Any

from .document import SourceMapDocument
from .mappings import encode_mappings


def source_map_to_dict(doc: SourceMapDocument) -> dict[str, Any]:
    # Sources are already canonical with the root applied, so sourceRoot is not written.
    out: dict[str, Any] = {"version": doc.version}
    if doc.file is not None:
        out["file"] = doc.file
    out["sources"] = list(doc.sources)
    if doc.sources_content is not None:
        out["sourcesContent"] = list(doc.sources_content)
    out["names"] = list(doc.names)
    out["mappings"] = encode_mappings(doc.mappings)
    return out


def dump_source_map(doc: SourceMapDocument, *, indent: int | None = None) -> str:
    return json.dumps(source_map_to_dict(doc), indent=indent, ensure_ascii=False)
