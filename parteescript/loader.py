"""Locating and reading script files."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

__all__ = ["load_script"]

_PARENT_LEVELS = 6


def _candidates(file_path: str) -> Iterator[Path]:
    requested = Path(file_path)
    name = requested.name
    cwd = Path.cwd()

    yield requested
    yield cwd / requested
    yield cwd / "src" / name

    current = cwd
    for _ in range(_PARENT_LEVELS):
        yield current / name
        yield current / "src" / name
        if current.parent == current:
            break
        current = current.parent


def load_script(file_path: str) -> str:
    """Return a script's text, searching the path, the working directory and its parents.

    Raises FileNotFoundError when no candidate location holds a readable file.
    """
    for candidate in _candidates(file_path):
        try:
            if candidate.is_file():
                return candidate.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
    raise FileNotFoundError(f"Failed to open script file: {file_path}")