"""CLI entrypoints for the llmdocs corpus builder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from .chunking import chunk_text
from .config import Config, load_config
from .content import load_source_document, normalize_document
from .pipeline import OutputConflictError, PipelineResult, run_pipeline
from .staging import remove_path
from .tokens import estimate_tokens

console = Console()
app = typer.Typer(help="Convert documentation sources into an LLM-ready text corpus.")

ConfigPathOption = Annotated[
    str,
    typer.Option(
        "--config",
        "-c",
        help="Path to a configuration file, or a directory that may contain llmdocs.yml.",
    ),
]
MaxTokensOption = Annotated[
    int | None,
    typer.Option("--max-tokens", min=1, help="Override the estimated token budget per chunk."),
]


@app.command()
def build(
    config_path: ConfigPathOption = ".",
    source: Annotated[
        Path | None,
        typer.Option("--source", "-s", help="Override the documentation source directory."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Override the output directory (deleted on every run)."),
    ] = None,
    max_tokens: MaxTokensOption = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every processed and skipped file."),
    ] = False,
) -> None:
    """Run a full, destructive rebuild of the text corpus and its index."""
    _configure_logging(verbose)
    config = _load(config_path)
    if source is not None:
        config.source_dir = source.resolve()
    if output is not None:
        config.output_dir = output.resolve()
    if max_tokens is not None:
        config.max_chunk_tokens = max_tokens

    console.print(
        f"[bold blue]Building[/]: {_display_path(config.source_dir)} -> "
        f"{_display_path(config.output_dir)} (max {config.max_chunk_tokens} tokens per chunk)"
    )
    try:
        result = run_pipeline(config)
    except OutputConflictError as exc:
        console.print(f"[bold red]Refusing to build[/]: {exc}")
        raise typer.Exit(code=1) from exc
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[bold red]Build failed[/]: {exc}")
        raise typer.Exit(code=1) from exc

    _print_build_summary(result)


@app.command()
def inspect(
    path: Annotated[
        Path,
        typer.Argument(..., exists=True, dir_okay=False, help="Documentation source file to preview."),
    ],
    config_path: ConfigPathOption = ".",
    max_tokens: MaxTokensOption = None,
    show_text: Annotated[
        bool,
        typer.Option("--show-text", help="Print the normalized text after the summary."),
    ] = False,
) -> None:
    """Normalize and chunk a single file without writing anything."""
    config = _load(config_path)
    budget = max_tokens or config.max_chunk_tokens

    document = load_source_document(path, path.parent)
    normalized = normalize_document(document.raw)
    chunks = chunk_text(normalized.text, budget)

    console.print(f"[bold green]Document[/]: {document.name}")
    if document.title:
        console.print(f"[bold green]Title[/]: {document.title}")
    console.print(
        f"[bold green]Estimate[/]: {estimate_tokens(normalized.text)} token(s); "
        f"{len(chunks)} chunk(s) at {budget} tokens per chunk"
    )
    if normalized.headings:
        console.print("[bold blue]Headings[/]:")
        for heading in normalized.headings:
            indent = "  " * (heading.level - 1)
            console.print(f"{indent}- {heading.label}", markup=False)
    else:
        console.print("[bold yellow]Headings[/]: none found")

    if show_text:
        console.print()
        console.print(normalized.text, markup=False, highlight=False)


@app.command()
def clean(config_path: ConfigPathOption = ".") -> None:
    """Remove the generated output directory."""
    config = _load(config_path)
    target = config.output_dir
    try:
        removed = remove_path(target)
    except OSError as exc:
        console.print(f"[bold red]Failed to remove[/]: {_display_path(target)} ({exc})")
        raise typer.Exit(code=1) from exc

    if removed:
        console.print(f"[bold green]Removed[/]: {_display_path(target)}")
    else:
        console.print(f"[bold yellow]Skipping[/]: {_display_path(target)} not found")


def _print_build_summary(result: PipelineResult) -> None:
    for outcome in result.corpus.documents:
        console.print(f"[green]✓[/] {outcome.source} -> {outcome.chunks} file(s)")

    corpus = result.corpus
    console.print(
        "[bold green]Corpus[/]: "
        f"{len(corpus.documents)} document(s) converted into {corpus.file_count} file(s), "
        f"~{corpus.total_tokens} token(s)"
    )
    console.print(
        "[bold green]Index[/]: "
        f"{len(result.index.entries)} entr(ies) written to {_display_path(result.index_path)}"
    )
    if result.report_path is not None:
        console.print(
            "[bold green]Report[/]: "
            f"{_display_path(result.report_path)} "
            f"(duration {result.report.duration_seconds:.2f}s)"
        )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _display_path(path: Path) -> str:
    try:
        return path.relative_to(Path.cwd()).as_posix()
    except ValueError:
        return path.as_posix()


def _load(path: str) -> Config:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def main() -> None:
    app()


if __name__ == "__main__":
    main()
