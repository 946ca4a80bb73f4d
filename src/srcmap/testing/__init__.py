from __future__ import annotations

from .corpus import generate_corpus_files, generate_segments, generate_source_maps

__all__ = ["generate_corpus_files", "generate_segments", "generate_source_maps"]
