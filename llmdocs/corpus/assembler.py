"""Wrap chunked documents with a metadata header and table of contents."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from ..content.models import Chunk, NormalizedDocument, SourceDocument, format_timestamp

HEADING_PREFIX = re.compile(r"^\d+(\.\d+)*\.")
TOC_BULLET = "- "
OUTPUT_SUFFIX = ".txt"


@dataclass(frozen=True, slots=True)
class AssembledFile:
    """A complete output file body and the name it is written under."""

    name: str
    body: str
    chunk: Chunk


def build_toc(text: str) -> list[str]:
    """Return every numbered heading line of ``text`` as a flat bullet list."""
    return [f"{TOC_BULLET}{line}" for line in text.split("\n") if HEADING_PREFIX.match(line)]


def render_header(
    *,
    title: str,
    source_name: str,
    version: str,
    generated_at: datetime,
    toc: Sequence[str],
    document_title: str | None = None,
    part: tuple[int, int] | None = None,
) -> str:
    lines = [
        f"# {title}",
        f"Source: {source_name}",
        f"Version: {version}",
        f"Generated: {format_timestamp(generated_at)}",
    ]
    if document_title:
        lines.append(f"Title: {document_title}")
    if part is not None:
        lines.append(f"Part: {part[0]} of {part[1]}")
    lines.extend(["", "## Table of Contents", *toc, "", "## Content"])
    return "\n".join(lines)


def output_names(base_name: str, count: int) -> list[str]:
    """Name outputs ``<base>.txt`` for one chunk, ``<base>.<n>.txt`` otherwise."""
    if count == 1:
        return [f"{base_name}{OUTPUT_SUFFIX}"]
    return [f"{base_name}.{ordinal}{OUTPUT_SUFFIX}" for ordinal in range(1, count + 1)]


def assemble_document(
    document: SourceDocument,
    normalized: NormalizedDocument,
    chunks: Sequence[Chunk],
    *,
    base_name: str,
    title: str,
    version: str,
    generated_at: datetime,
) -> list[AssembledFile]:
    """Build one file body per chunk.

    The table of contents always comes from the whole normalized text, so every
    part of a split document carries the full outline.
    """
    if not chunks:
        raise ValueError(f"{document.relative_path}: no chunks to assemble")

    toc = build_toc(normalized.text)
    total = len(chunks)
    files: list[AssembledFile] = []
    for name, chunk in zip(output_names(base_name, total), chunks):
        header = render_header(
            title=title,
            source_name=document.name,
            version=version,
            generated_at=generated_at,
            toc=toc,
            document_title=document.title,
            part=(chunk.ordinal, total) if total > 1 else None,
        )
        files.append(AssembledFile(name=name, body=f"{header}\n\n{chunk.text}", chunk=chunk))
    return files
