"""Filesystem helpers for preparing and removing the output tree."""

from __future__ import annotations

import shutil
from pathlib import Path


def reset_directory(path: Path) -> None:
    """Remove a directory and recreate it empty."""
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


def remove_path(path: Path) -> bool:
    """Delete a file or directory tree; return whether anything was removed."""
    if path.is_dir():
        shutil.rmtree(path)
        return True
    if path.exists():
        path.unlink()
        return True
    return False
