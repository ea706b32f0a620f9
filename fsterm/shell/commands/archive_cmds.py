"""zip and unzip commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..common import CommandResult
from ..registry import COMMAND_REGISTRY
from ...archive import ArchiveSource, create_archive, extract_archive
from ...exceptions import NotFoundError, TypeMismatchError, UsageError

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Terminal


@COMMAND_REGISTRY.command(
    "zip",
    description="Create a zip archive",
    usage="zip archive file... | zip -r archive directory",
)
def zip_(shell: "Terminal", args: list[str]) -> CommandResult:
    if args and args[0] == "-r":
        if len(args) != 3:
            raise UsageError("Usage: zip -r <archive> <directory>")
        source = shell.resolve(args[2])
        if not source.exists():
            raise NotFoundError(f"Directory {source} does not exist")
        if not source.is_dir():
            raise TypeMismatchError(f"{source} is not a directory; use zip without -r")
        create_archive(shell.resolve(args[1]), [ArchiveSource(source.resolve())])
        return CommandResult()

    if len(args) < 2:
        raise UsageError("zip expects an archive name and at least one file")
    archive = shell.resolve(args[0])
    sources = [shell.resolve(name) for name in args[1:]]
    names: set[str] = set()
    for source in sources:
        if not source.exists():
            raise NotFoundError(f"File {source} does not exist")
        if source.is_dir():
            raise TypeMismatchError(f"{source} is a directory; use zip -r")
        if source.resolve() == archive.resolve():
            raise UsageError(f"zip: cannot add the archive {archive} to itself")
        if source.name in names:
            raise UsageError(f"zip: more than one file named {source.name}")
        names.add(source.name)
    create_archive(archive, [ArchiveSource(source) for source in sources])
    return CommandResult()


@COMMAND_REGISTRY.command(
    "unzip",
    description="Extract a zip archive",
    usage="unzip archive [-d destination]",
)
def unzip(shell: "Terminal", args: list[str]) -> CommandResult:
    if len(args) == 1:
        archive, dest = shell.resolve(args[0]), shell.cwd
    elif len(args) == 3 and args[1] == "-d":
        archive, dest = shell.resolve(args[0]), shell.resolve(args[2])
    else:
        raise UsageError("Usage: unzip <archive> [-d <destination>]")
    if not archive.exists():
        raise NotFoundError(f"Zip file {archive} does not exist")
    if archive.is_dir():
        raise TypeMismatchError(f"{archive} is a directory, not a zip file")
    extract_archive(archive, dest)
    return CommandResult()
