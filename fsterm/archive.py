"""Zip archive creation and extraction."""

from __future__ import annotations

import logging
import shutil
import zipfile
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .exceptions import ArchiveError
from .path_utils import describe_os_error, is_within
from .walker import walk

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class ArchiveSource:
    """A top-level path to archive and the archive directory it lands in."""

    path: Path
    prefix: str = ""


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    name: str
    source: Path
    is_dir: bool


def archive_name(prefix: str, relative: PurePosixPath | str, *, is_dir: bool) -> str:
    name = str(PurePosixPath(prefix, relative)) if prefix else str(relative)
    name = name.replace("\\", "/").lstrip("/")
    if is_dir and not name.endswith("/"):
        name += "/"
    return name


def iter_entries(source: ArchiveSource, *, skip: Path | None = None) -> Iterator[ArchiveEntry]:
    """Yield the entries for ``source`` in pre-order.

    A directory contributes an entry named after itself followed by its
    descendants; ``skip`` (typically the archive being written) is left out.
    """

    root = source.path
    base = PurePosixPath(root.name)

    def _prune(path: Path) -> bool:
        return skip is not None and path == skip

    if not root.is_dir():
        yield ArchiveEntry(archive_name(source.prefix, base, is_dir=False), root, False)
        return
    for path in walk(root, prune=_prune):
        relative = base.joinpath(*path.relative_to(root).parts)
        is_dir = path.is_dir()
        yield ArchiveEntry(archive_name(source.prefix, relative, is_dir=is_dir), path, is_dir)


def _write_entry(zf: zipfile.ZipFile, entry: ArchiveEntry) -> None:
    info = zipfile.ZipInfo.from_file(entry.source, entry.name, strict_timestamps=False)
    if entry.is_dir:
        zf.writestr(info, b"")
        return
    info.compress_type = zipfile.ZIP_DEFLATED
    with open(entry.source, "rb") as src, zf.open(info, "w") as dst:
        shutil.copyfileobj(src, dst, CHUNK_SIZE)


def _discard(dest: Path) -> None:
    if dest.is_file():
        dest.unlink()


def create_archive(dest: Path, sources: Iterable[ArchiveSource]) -> int:
    """Write ``sources`` into a new zip archive at ``dest``.

    Returns the number of entries written. Any failure removes the partially
    written archive and raises ``ArchiveError``.
    """

    skip = dest.resolve()
    seen: set[str] = set()
    count = 0
    try:
        with zipfile.ZipFile(dest, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for source in sources:
                for entry in iter_entries(source, skip=skip):
                    if entry.name in seen:
                        raise ArchiveError(f"Duplicate archive entry: {entry.name}")
                    seen.add(entry.name)
                    _write_entry(zf, entry)
                    count += 1
    except ArchiveError:
        _discard(dest)
        raise
    except OSError as exc:
        _discard(dest)
        where = f" ({exc.filename})" if exc.filename else ""
        raise ArchiveError(f"Failed to create {dest}: {describe_os_error(exc)}{where}") from exc
    logger.info("created %s with %d entries", dest, count)
    return count


def _entry_target(dest: Path, name: str) -> Path:
    pure = PurePosixPath(name.replace("\\", "/"))
    if pure.is_absolute() or ".." in pure.parts or Path(name).drive:
        raise ArchiveError(f"Refusing to extract unsafe entry: {name}")
    target = dest.joinpath(*pure.parts)
    if not is_within(target.resolve(), dest.resolve()):
        raise ArchiveError(f"Refusing to extract unsafe entry: {name}")
    return target


def extract_archive(archive: Path, dest: Path) -> int:
    """Extract every entry of ``archive`` under ``dest`` in stored order.

    All entry names are validated before anything is written. Existing files
    are overwritten. Returns the number of entries extracted.
    """

    count = 0
    try:
        with zipfile.ZipFile(archive) as zf:
            members = zf.infolist()
            targets = [_entry_target(dest, info.filename) for info in members]
            dest.mkdir(parents=True, exist_ok=True)
            for info, target in zip(members, targets):
                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                else:
                    target.parent.mkdir(parents=True, exist_ok=True)
                    with zf.open(info) as src, open(target, "wb") as dst:
                        shutil.copyfileobj(src, dst, CHUNK_SIZE)
                count += 1
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Failed to extract {archive}: {exc}") from exc
    except OSError as exc:
        where = f" ({exc.filename})" if exc.filename else ""
        raise ArchiveError(f"Failed to extract {archive}: {describe_os_error(exc)}{where}") from exc
    logger.info("extracted %d entries from %s into %s", count, archive, dest)
    return count


__all__ = [
    "ArchiveEntry",
    "ArchiveSource",
    "CHUNK_SIZE",
    "archive_name",
    "create_archive",
    "extract_archive",
    "iter_entries",
]
