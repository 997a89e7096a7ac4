"""Utilities for reading and normalizing documentation sources."""

from .models import Chunk, Heading, NormalizedDocument, SourceDocument
from .normalizer import normalize_document
from .parsers import load_source_document, parse_front_matter, split_front_matter

__all__ = [
    "Chunk",
    "Heading",
    "NormalizedDocument",
    "SourceDocument",
    "load_source_document",
    "normalize_document",
    "parse_front_matter",
    "split_front_matter",
]
