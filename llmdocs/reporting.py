"""Build reporting helpers for corpus runs."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from .corpus import CorpusResult
from .manifests import ManifestIndex


class DocumentStats(BaseModel):
    source: str
    files: list[str]
    chunks: int
    headings: int
    tokens: int


class BuildReport(BaseModel):
    project: str
    generated_at: datetime
    duration_seconds: float
    document_count: int
    file_count: int
    total_tokens: int
    max_chunk_tokens: int
    index_entries: int
    documents: list[DocumentStats] = Field(default_factory=list)


def build_document_stats(result: CorpusResult) -> list[DocumentStats]:
    stats = [
        DocumentStats(
            source=outcome.source,
            files=list(outcome.files),
            chunks=outcome.chunks,
            headings=outcome.headings,
            tokens=outcome.tokens,
        )
        for outcome in result.documents
    ]
    return sorted(stats, key=lambda item: item.source)


def assemble_report(
    *,
    project: str,
    generated_at: datetime,
    duration_seconds: float,
    corpus: CorpusResult,
    index: ManifestIndex,
    max_chunk_tokens: int,
) -> BuildReport:
    return BuildReport(
        project=project,
        generated_at=generated_at,
        duration_seconds=duration_seconds,
        document_count=len(corpus.documents),
        file_count=corpus.file_count,
        total_tokens=corpus.total_tokens,
        max_chunk_tokens=max_chunk_tokens,
        index_entries=len(index.entries),
        documents=build_document_stats(corpus),
    )


def write_report(report: BuildReport, target: Path) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        json.dump(report.model_dump(mode="json"), handle, ensure_ascii=False, indent=2)
    return target
