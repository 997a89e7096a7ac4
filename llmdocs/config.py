"""Configuration model and loader for the corpus pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_FILENAME = "llmdocs.yml"
DEFAULT_MAX_CHUNK_TOKENS = 2000


class Config(BaseModel):
    project_name: str = Field(
        default="Documentation",
        description="Name used in the title line of every generated file and the index.",
    )
    source_dir: Path = Field(default=Path("src/content/docs"))
    output_dir: Path = Field(default=Path("public/llms.txt"))
    source_suffixes: list[str] = Field(
        default_factory=lambda: [".mdx"],
        description="File name endings accepted as documentation sources.",
    )
    max_chunk_tokens: int = Field(
        default=DEFAULT_MAX_CHUNK_TOKENS,
        ge=1,
        description="Estimated token budget per generated chunk.",
    )
    version_label: str | None = Field(
        default=None,
        description="Value of the 'Version:' header line (defaults to the package version).",
    )
    index_filename: str = Field(default="index.txt")
    url_prefix: str | None = Field(
        default=None,
        description="Root segment used for manifest paths (defaults to the output directory name).",
    )
    report_filename: str | None = Field(
        default="build-report.json",
        description="Build report written next to the index; null disables it.",
    )

    @field_validator("source_dir", "output_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("source_suffixes", mode="before")
    def _normalize_suffixes(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            value = [value]
        suffixes: list[str] = []
        for item in value or []:
            text = str(item).strip()
            if not text:
                continue
            if not text.startswith("."):
                text = f".{text}"
            suffixes.append(text)
        if not suffixes:
            raise ValueError("source_suffixes must contain at least one extension.")
        return suffixes

    @field_validator("url_prefix")
    def _strip_slashes(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip().strip("/")
        return cleaned or None

    @property
    def resolved_url_prefix(self) -> str:
        return self.url_prefix or self.output_dir.name

    @property
    def index_path(self) -> Path:
        return self.output_dir / self.index_filename


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    The ``path`` argument may point to a file (e.g., ``/docs/llmdocs.yml``) or a
    directory containing that file. All relative paths inside the configuration
    are interpreted relative to the directory holding the config file.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    base_dir: Path
    if candidate.is_dir():
        # A project directory without a config file runs on defaults.
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    cfg = Config(**data)

    def _abs(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.source_dir = _abs(cfg.source_dir)
    cfg.output_dir = _abs(cfg.output_dir)
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {path} must be a mapping.")
    return data
