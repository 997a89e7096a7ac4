"""Corpus assembly and tree writing."""

from .assembler import AssembledFile, assemble_document, build_toc, output_names, render_header
from .writer import (
    CorpusPlan,
    CorpusResult,
    DocumentOutcome,
    OutputConflictError,
    plan_corpus,
    write_corpus,
    write_plan,
)

__all__ = [
    "AssembledFile",
    "CorpusPlan",
    "CorpusResult",
    "DocumentOutcome",
    "OutputConflictError",
    "assemble_document",
    "build_toc",
    "output_names",
    "plan_corpus",
    "render_header",
    "write_corpus",
    "write_plan",
]
