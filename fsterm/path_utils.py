"""Helpers for resolving user-supplied paths against the working directory."""

from __future__ import annotations

import os
from pathlib import Path


def resolve_path(raw: str | os.PathLike[str], cwd: Path) -> Path:
    """Return ``raw`` as given when absolute, otherwise joined onto ``cwd``.

    The filesystem is never consulted; callers validate existence.
    """

    path = Path(raw)
    if path.is_absolute():
        return path
    return cwd / path


def canonical_directory(path: Path) -> Path:
    """Resolve symlinks and redundant segments of an existing directory.

    Raises ``OSError`` when ``path`` is missing or not a directory.
    """

    resolved = path.resolve(strict=True)
    if not resolved.is_dir():
        raise NotADirectoryError(f"{resolved} is not a directory")
    return resolved


def is_within(path: Path, parent: Path) -> bool:
    try:
        path.relative_to(parent)
    except ValueError:
        return False
    return True


def describe_os_error(exc: OSError) -> str:
    return exc.strerror or str(exc)


__all__ = ["resolve_path", "canonical_directory", "is_within", "describe_os_error"]
