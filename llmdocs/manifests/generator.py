"""Build the corpus index from the files present in the output tree."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable

from ..content.models import format_timestamp
from .models import ManifestEntry, ManifestIndex

GENERATED_SUFFIX = ".txt"


def collect_generated_files(output_root: Path, *, exclude: Iterable[str] = ()) -> list[str]:
    """Return the sorted relative paths of every generated text file.

    ``exclude`` holds relative paths to leave out, typically the index itself.
    """
    excluded = {path.replace("\\", "/") for path in exclude}
    files: list[str] = []
    for path in output_root.rglob(f"*{GENERATED_SUFFIX}"):
        if not path.is_file():
            continue
        relative = path.relative_to(output_root).as_posix()
        if relative in excluded:
            continue
        files.append(relative)
    return sorted(files)


def build_index(
    output_root: Path,
    *,
    title: str,
    generated_at: datetime,
    url_prefix: str,
    index_filename: str,
) -> ManifestIndex:
    paths = collect_generated_files(output_root, exclude=[index_filename])
    return ManifestIndex(
        title=title,
        generated_at=generated_at,
        url_prefix=url_prefix,
        entries=[ManifestEntry(path=path) for path in paths],
    )


def render_index(index: ManifestIndex) -> str:
    lines = [
        f"# {index.title} Index",
        f"Generated: {format_timestamp(index.generated_at)}",
        "",
        "## Files",
        *(f"- {entry.url(index.url_prefix)}" for entry in index.entries),
    ]
    return "\n".join(lines)
