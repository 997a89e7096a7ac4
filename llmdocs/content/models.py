"""Typed representations of documentation sources and their normalized form."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceDocument(BaseModel):
    """A documentation source file read from the source tree."""

    model_config = ConfigDict(frozen=True)

    relative_path: str = Field(description="Forward-slash path relative to the source root.")
    name: str = Field(description="File name including its extension.")
    raw: str = Field(description="Unmodified file contents.")
    front_matter: dict[str, Any] = Field(default_factory=dict)

    @field_validator("relative_path")
    def _normalize_separators(cls, value: str) -> str:
        return value.replace("\\", "/").lstrip("/")

    @property
    def title(self) -> str | None:
        value = self.front_matter.get("title")
        if value is None:
            return None
        text = str(value).strip()
        return text or None


class Heading(BaseModel):
    """A numbered heading collected while normalizing a document."""

    model_config = ConfigDict(frozen=True)

    level: Literal[1, 2, 3]
    ordinal: tuple[int, int, int]
    title: str

    @property
    def number(self) -> str:
        return ".".join(str(part) for part in self.ordinal[: self.level])

    @property
    def label(self) -> str:
        """Heading line as it appears in the normalized text."""
        title = self.title.upper() if self.level == 1 else self.title
        return f"{self.number}. {title}"


class NormalizedDocument(BaseModel):
    """Plain-text rendition of a source document plus its heading outline."""

    model_config = ConfigDict(frozen=True)

    text: str
    headings: list[Heading] = Field(default_factory=list)


class Chunk(BaseModel):
    """A word-safe slice of normalized text."""

    model_config = ConfigDict(frozen=True)

    ordinal: int = Field(ge=1)
    text: str


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
