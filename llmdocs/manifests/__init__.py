"""Corpus index data structures and helpers."""

from .generator import build_index, collect_generated_files, render_index
from .models import ManifestEntry, ManifestIndex
from .writer import write_index

__all__ = [
    "ManifestEntry",
    "ManifestIndex",
    "build_index",
    "collect_generated_files",
    "render_index",
    "write_index",
]
