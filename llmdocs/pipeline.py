"""End-to-end corpus build: reset, convert, index, report."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .config import Config
from .content.models import utc_now
from .corpus import CorpusResult, OutputConflictError, plan_corpus, write_plan
from .manifests import ManifestIndex, build_index, write_index
from .reporting import BuildReport, assemble_report, write_report
from .staging import reset_directory

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineResult:
    """Artifacts produced by one full rebuild."""

    generated_at: datetime
    corpus: CorpusResult
    index: ManifestIndex
    index_path: Path
    report: BuildReport
    report_path: Path | None


def run_pipeline(config: Config, *, generated_at: datetime | None = None) -> PipelineResult:
    """Rebuild the whole output tree from ``config.source_dir``.

    Every source is read and its output names are checked before the output
    directory is deleted; a read error or a name conflict leaves the previous
    tree untouched. ``generated_at`` is captured once and stamped on every
    file, the index and the report.
    """
    source_root = config.source_dir
    output_root = config.output_dir
    _check_roots(source_root, output_root)

    stamp = generated_at or utc_now()
    version = _resolve_version_label(config)
    start = time.perf_counter()

    plan = plan_corpus(
        source_root,
        output_root,
        config=config,
        version=version,
        generated_at=stamp,
    )

    logger.info("Resetting output directory %s", output_root)
    reset_directory(output_root)
    corpus = write_plan(plan, output_root)

    index = build_index(
        output_root,
        title=config.project_name,
        generated_at=stamp,
        url_prefix=config.resolved_url_prefix,
        index_filename=config.index_filename,
    )
    index_path = write_index(index, config.index_path)
    logger.info("Wrote index with %d file(s) to %s", len(index.entries), index_path)

    report = assemble_report(
        project=config.project_name,
        generated_at=stamp,
        duration_seconds=time.perf_counter() - start,
        corpus=corpus,
        index=index,
        max_chunk_tokens=config.max_chunk_tokens,
    )
    report_path: Path | None = None
    if config.report_filename:
        report_path = write_report(report, output_root / config.report_filename)

    return PipelineResult(
        generated_at=stamp,
        corpus=corpus,
        index=index,
        index_path=index_path,
        report=report,
        report_path=report_path,
    )


def _check_roots(source_root: Path, output_root: Path) -> None:
    if not source_root.exists():
        raise FileNotFoundError(f"Source directory not found: {source_root}")
    if not source_root.is_dir():
        raise NotADirectoryError(f"Source path is not a directory: {source_root}")

    source_abs = source_root.resolve()
    output_abs = output_root.resolve()
    if source_abs == output_abs or output_abs in source_abs.parents:
        raise OutputConflictError(
            f"Output directory {output_root} contains the sources and would be deleted."
        )


def _resolve_version_label(config: Config) -> str:
    if config.version_label:
        return config.version_label
    from . import __version__

    return __version__
