"""Read source files into `SourceDocument` instances."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .models import SourceDocument

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"


def load_source_document(path: str | Path, root: str | Path) -> SourceDocument:
    """Load a documentation file, keeping its raw text and parsed front matter."""
    source_path = Path(path)
    raw = source_path.read_text(encoding="utf-8-sig")
    relative = source_path.relative_to(Path(root)).as_posix()
    return SourceDocument(
        relative_path=relative,
        name=source_path.name,
        raw=raw,
        front_matter=parse_front_matter(raw, source=relative),
    )


def split_front_matter(text: str) -> tuple[str | None, str]:
    """Split a leading ``---`` block from the body.

    Returns ``(None, text)`` when the document has no front matter or the
    block is never closed.
    """
    lines = text.split("\n")
    if not lines or lines[0].rstrip("\r") != FRONT_MATTER_DELIMITER:
        return None, text

    for idx, line in enumerate(lines[1:], start=1):
        if line.rstrip("\r") == FRONT_MATTER_DELIMITER:
            return "\n".join(lines[1:idx]), "\n".join(lines[idx + 1 :])
    return None, text


def parse_front_matter(text: str, *, source: str = "<string>") -> dict[str, Any]:
    raw_front_matter, _ = split_front_matter(text)
    if raw_front_matter is None:
        return {}
    try:
        data = yaml.safe_load(raw_front_matter)
    except yaml.YAMLError as exc:
        logger.warning("Ignoring unparsable front matter in %s: %s", source, exc)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Front matter in %s should define a mapping; ignoring.", source)
        return {}
    return data
