from __future__ import annotations

from .api import (
    original_position_for,
    original_positions_for,
    parse_file,
    parse_source_map,
    source_content_for,
)
from .document import SourceMapDocument
from .errors import InvalidQueryError, MalformedMapError, SourceMapError
from .format import dump_source_map
from .mappings import decode_mappings, encode_mappings
from .model import MappingSegment, PositionQuery, ResolvedPosition

__all__ = [
    "InvalidQueryError",
    "MalformedMapError",
    "MappingSegment",
    "PositionQuery",
    "ResolvedPosition",
    "SourceMapDocument",
    "SourceMapError",
    "decode_mappings",
    "dump_source_map",
    "encode_mappings",
    "original_position_for",
    "original_positions_for",
    "parse_file",
    "parse_source_map",
    "source_content_for",
]
