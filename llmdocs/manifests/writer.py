"""Persistence helper for the corpus index."""

from __future__ import annotations

from pathlib import Path

from .generator import render_index
from .models import ManifestIndex


def write_index(index: ManifestIndex, destination: Path) -> Path:
    """Write the rendered index to ``destination`` and return it."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(render_index(index), encoding="utf-8")
    return destination
