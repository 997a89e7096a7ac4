"""Walk the source tree and write the mirrored plain-text corpus."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Sequence

from ..chunking import chunk_text
from ..config import Config
from ..content import load_source_document, normalize_document
from ..tokens import estimate_tokens
from .assembler import assemble_document

logger = logging.getLogger(__name__)


class OutputConflictError(ValueError):
    """Raised when the configured output location would clobber inputs or outputs."""


@dataclass(slots=True)
class DocumentOutcome:
    """What one source document produced."""

    source: str
    files: list[str]
    headings: int
    tokens: int

    @property
    def chunks(self) -> int:
        return len(self.files)


@dataclass(slots=True)
class CorpusResult:
    """Summary of a corpus write."""

    documents: list[DocumentOutcome] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return sum(outcome.chunks for outcome in self.documents)

    @property
    def total_tokens(self) -> int:
        return sum(outcome.tokens for outcome in self.documents)


@dataclass(slots=True)
class PlannedDocument:
    outcome: DocumentOutcome
    bodies: list[str]


@dataclass(slots=True)
class CorpusPlan:
    """Every directory and file a corpus write will create, in walk order."""

    directories: list[str] = field(default_factory=list)
    documents: list[PlannedDocument] = field(default_factory=list)
    claimed: dict[str, str] = field(default_factory=dict)

    def reserve(self, path: str, owner: str, setting: str) -> None:
        self.claimed[path] = f"{owner} (set {setting} to move it)"

    def claim(self, path: str, source: str) -> None:
        owner = self.claimed.get(path)
        if owner is not None:
            raise OutputConflictError(
                f"{source} produces {path}, which is already taken by {owner}."
            )
        self.claimed[path] = source

    @property
    def result(self) -> CorpusResult:
        return CorpusResult(documents=[planned.outcome for planned in self.documents])


def write_corpus(
    source_root: Path,
    output_root: Path,
    *,
    config: Config,
    version: str,
    generated_at: datetime,
) -> CorpusResult:
    """Convert every accepted file under ``source_root`` into ``output_root``.

    Entries are visited in directory listing order. Any read or write failure
    propagates and stops the walk. Output names are checked before anything is
    written.
    """
    plan = plan_corpus(
        source_root,
        output_root,
        config=config,
        version=version,
        generated_at=generated_at,
    )
    return write_plan(plan, output_root)


def plan_corpus(
    source_root: Path,
    output_root: Path,
    *,
    config: Config,
    version: str,
    generated_at: datetime,
) -> CorpusPlan:
    """Read, normalize and assemble every source without touching ``output_root``.

    Raises :class:`OutputConflictError` when two documents would write the same
    file, or when a document would overwrite the index or the build report.
    """
    plan = CorpusPlan()
    plan.reserve(config.index_filename, "the index", "index_filename")
    if config.report_filename:
        plan.reserve(config.report_filename, "the build report", "report_filename")

    _plan_directory(
        source_root,
        source_root=source_root,
        skip=output_root.resolve(),
        config=config,
        version=version,
        generated_at=generated_at,
        plan=plan,
    )
    return plan


def write_plan(plan: CorpusPlan, output_root: Path) -> CorpusResult:
    for directory in plan.directories:
        (output_root / directory).mkdir(parents=True, exist_ok=True)

    for planned in plan.documents:
        for relative, body in zip(planned.outcome.files, planned.bodies):
            (output_root / relative).write_text(body, encoding="utf-8")
        logger.info("Processed %s (%d chunk(s))", planned.outcome.source, planned.outcome.chunks)
    return plan.result


def match_suffix(name: str, suffixes: Sequence[str]) -> str | None:
    for suffix in suffixes:
        if name.endswith(suffix) and len(name) > len(suffix):
            return suffix
    return None


def _plan_directory(
    source_dir: Path,
    *,
    source_root: Path,
    skip: Path,
    config: Config,
    version: str,
    generated_at: datetime,
    plan: CorpusPlan,
) -> None:
    for entry in source_dir.iterdir():
        if entry.is_dir():
            if entry.resolve() == skip:
                logger.debug("Skipping output directory nested in sources: %s", entry)
                continue
            plan.directories.append(entry.relative_to(source_root).as_posix())
            _plan_directory(
                entry,
                source_root=source_root,
                skip=skip,
                config=config,
                version=version,
                generated_at=generated_at,
                plan=plan,
            )
            continue

        suffix = match_suffix(entry.name, config.source_suffixes)
        if suffix is None:
            logger.debug("Ignoring non-source file: %s", entry)
            continue

        planned = _plan_file(
            entry,
            base_name=entry.name[: -len(suffix)],
            source_root=source_root,
            config=config,
            version=version,
            generated_at=generated_at,
        )
        for relative in planned.outcome.files:
            plan.claim(relative, planned.outcome.source)
        plan.documents.append(planned)


def _plan_file(
    path: Path,
    *,
    base_name: str,
    source_root: Path,
    config: Config,
    version: str,
    generated_at: datetime,
) -> PlannedDocument:
    document = load_source_document(path, source_root)
    normalized = normalize_document(document.raw)
    chunks = chunk_text(normalized.text, config.max_chunk_tokens)
    files = assemble_document(
        document,
        normalized,
        chunks,
        base_name=base_name,
        title=config.project_name,
        version=version,
        generated_at=generated_at,
    )

    relative_dir = Path(document.relative_path).parent
    outcome = DocumentOutcome(
        source=document.relative_path,
        files=[(relative_dir / assembled.name).as_posix() for assembled in files],
        headings=len(normalized.headings),
        tokens=estimate_tokens(normalized.text),
    )
    return PlannedDocument(outcome=outcome, bodies=[assembled.body for assembled in files])
