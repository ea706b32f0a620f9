"""Pre-order traversal of directory trees."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

PrunePredicate = Callable[[Path], bool]
ErrorHandler = Callable[[OSError], None]


def walk(
    root: Path,
    *,
    prune: PrunePredicate | None = None,
    onerror: ErrorHandler | None = None,
) -> Iterator[Path]:
    """Yield ``root`` and everything beneath it, parents before children.

    Children are visited in name order. Directories are listed only when the
    walk reaches them, so entries created by the caller mid-walk may show up.
    Symlinked directories are yielded but never descended into. Paths for
    which ``prune`` returns true are skipped together with their subtree.
    Listing failures go to ``onerror`` when given and are raised otherwise.
    """

    stack: list[Path] = [root]
    while stack:
        current = stack.pop()
        if prune is not None and prune(current):
            continue
        yield current
        if current.is_symlink() or not current.is_dir():
            continue
        try:
            with os.scandir(current) as it:
                names = sorted(entry.name for entry in it)
        except OSError as exc:
            if onerror is None:
                raise
            onerror(exc)
            continue
        stack.extend(current / name for name in reversed(names))


__all__ = ["walk", "PrunePredicate", "ErrorHandler"]
