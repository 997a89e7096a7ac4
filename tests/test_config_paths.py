from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from llmdocs.config import DEFAULT_MAX_CHUNK_TOKENS, Config, load_config


def _write_project_config(root: Path) -> Path:
    config_text = (
        "project_name: Widget Docs\n"
        "source_dir: src/content/docs\n"
        "output_dir: public/llms.txt\n"
        "source_suffixes: [mdx, .md]\n"
        "max_chunk_tokens: 1500\n"
        "url_prefix: /llm/\n"
    )
    cfg_path = root / "llmdocs.yml"
    cfg_path.write_text(config_text, encoding="utf-8")
    return cfg_path


def test_load_config_resolves_paths_relative_to_config_directory(tmp_path: Path) -> None:
    project = tmp_path / "project"
    project.mkdir()
    _write_project_config(project)

    # Pass a directory path; loader should find llmdocs.yml inside it.
    cfg = load_config(project)

    assert cfg.project_name == "Widget Docs"
    assert cfg.source_dir == (project / "src" / "content" / "docs").resolve()
    assert cfg.output_dir == (project / "public" / "llms.txt").resolve()
    assert cfg.source_suffixes == [".mdx", ".md"]
    assert cfg.max_chunk_tokens == 1500
    assert cfg.resolved_url_prefix == "llm"


def test_load_config_accepts_config_file_path(tmp_path: Path) -> None:
    project = tmp_path / "siteproj"
    project.mkdir()
    config_file = _write_project_config(project)

    cfg = load_config(config_file)
    assert cfg.output_dir == (project / "public" / "llms.txt").resolve()
    assert cfg.index_path == cfg.output_dir / "index.txt"


def test_load_config_uses_defaults_when_directory_has_no_config(tmp_path: Path) -> None:
    project = tmp_path / "emptyproj"
    project.mkdir()

    cfg = load_config(project)

    assert cfg.source_dir == (project / "src" / "content" / "docs").resolve()
    assert cfg.output_dir == (project / "public" / "llms.txt").resolve()
    assert cfg.source_suffixes == [".mdx"]
    assert cfg.max_chunk_tokens == DEFAULT_MAX_CHUNK_TOKENS == 2000
    assert cfg.resolved_url_prefix == "llms.txt"


def test_load_config_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yml")


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "llmdocs.yml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        load_config(path)


def test_chunk_budget_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Config(max_chunk_tokens=0)


def test_suffix_list_cannot_be_empty() -> None:
    with pytest.raises(ValidationError):
        Config(source_suffixes=[" "])
