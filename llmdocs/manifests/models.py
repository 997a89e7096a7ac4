"""Pydantic models describing the corpus index."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class ManifestEntry(BaseModel):
    """One generated file, addressed relative to the output root."""

    path: str = Field(description="Forward-slash path relative to the output root.")

    @field_validator("path")
    def _normalize_separators(cls, value: str) -> str:
        return value.replace("\\", "/").lstrip("/")

    def url(self, prefix: str) -> str:
        prefix = prefix.strip("/")
        if not prefix:
            return f"/{self.path}"
        return f"/{prefix}/{self.path}"


class ManifestIndex(BaseModel):
    """The single index listing every file produced by a run."""

    title: str
    generated_at: datetime
    url_prefix: str
    entries: list[ManifestEntry] = Field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        return [entry.path for entry in self.entries]
