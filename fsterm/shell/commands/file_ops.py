"""File manipulation commands."""

from __future__ import annotations

import errno
import logging
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from ..common import CommandResult
from ..registry import COMMAND_REGISTRY
from ...exceptions import (
    AlreadyExistsError,
    IOFailure,
    NotEmptyError,
    NotFoundError,
    ShellError,
    TypeMismatchError,
    UsageError,
)
from ...path_utils import describe_os_error, is_within
from ...walker import walk

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Terminal

logger = logging.getLogger(__name__)

_NOT_EMPTY = {errno.ENOTEMPTY, errno.EEXIST}


def _names_destination(arg: str) -> bool:
    return os.sep in arg or "/" in arg or os.path.isabs(arg)


def _is_real_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def _make_directory(target: Path) -> None:
    if target.exists():
        raise AlreadyExistsError(f"Directory {target} already exists")
    try:
        target.mkdir(parents=True)
    except OSError as exc:
        raise IOFailure(f"Failed to create directory {target}: {describe_os_error(exc)}") from exc


def _remove_empty_directory(target: Path) -> None:
    try:
        target.rmdir()
    except OSError as exc:
        if exc.errno in _NOT_EMPTY:
            raise NotEmptyError(f"Failed to remove {target}: directory is not empty") from exc
        raise IOFailure(f"Failed to remove {target}: {describe_os_error(exc)}") from exc


@COMMAND_REGISTRY.command(
    "mkdir", description="Create directories", usage="mkdir name... [destination/]"
)
def mkdir(shell: "Terminal", args: list[str]) -> CommandResult:
    if not args:
        raise UsageError("mkdir expects at least one directory name")
    if len(args) > 1 and _names_destination(args[-1]):
        destination = shell.resolve(args[-1])
        targets = [destination / Path(name).name for name in args[:-1]]
    else:
        targets = [shell.resolve(name) for name in args]
    errors: list[ShellError] = []
    for target in targets:
        try:
            _make_directory(target)
        except ShellError as exc:
            errors.append(exc)
    return CommandResult.from_errors(errors)


@COMMAND_REGISTRY.command(
    "rmdir", description="Remove empty directories", usage="rmdir directory... | rmdir *"
)
def rmdir(shell: "Terminal", args: list[str]) -> CommandResult:
    if not args:
        raise UsageError("rmdir expects at least one directory name")
    errors: list[ShellError] = []
    if args == ["*"]:
        try:
            children = sorted(shell.cwd.iterdir())
        except OSError as exc:
            raise IOFailure(f"Failed to list contents of {shell.cwd}: {describe_os_error(exc)}") from exc
        for child in children:
            if not _is_real_dir(child):
                continue
            try:
                _remove_empty_directory(child)
            except NotEmptyError:
                continue
            except ShellError as exc:
                errors.append(exc)
        return CommandResult.from_errors(errors)
    for name in args:
        target = shell.resolve(name)
        try:
            if not target.exists():
                raise NotFoundError(f"Directory {target} does not exist")
            if not _is_real_dir(target):
                raise TypeMismatchError(f"{target} is not a directory")
            _remove_empty_directory(target)
        except ShellError as exc:
            errors.append(exc)
    return CommandResult.from_errors(errors)


@COMMAND_REGISTRY.command(
    "touch", description="Create empty files or update timestamps", usage="touch file..."
)
def touch(shell: "Terminal", args: list[str]) -> CommandResult:
    if not args:
        raise UsageError("touch expects at least one file")
    errors: list[ShellError] = []
    for name in args:
        target = shell.resolve(name)
        if target.is_dir():
            errors.append(
                TypeMismatchError(f"Cannot touch directory {target}; use mkdir for directories")
            )
            continue
        try:
            target.touch(exist_ok=True)
        except OSError as exc:
            errors.append(IOFailure(f"Failed to create file {target}: {describe_os_error(exc)}"))
    return CommandResult.from_errors(errors)


def _remove(target: Path, mode: str) -> None:
    if not target.exists() and not target.is_symlink():
        raise NotFoundError(f"File {target} does not exist")
    is_dir = _is_real_dir(target)
    if mode == "file" and is_dir:
        raise TypeMismatchError(f"{target} is a directory; use rm -d or rm -r")
    if mode == "empty-dir":
        if not is_dir:
            raise TypeMismatchError(f"{target} is not a directory")
        _remove_empty_directory(target)
        return
    try:
        if is_dir:
            shutil.rmtree(target)
        else:
            target.unlink()
    except OSError as exc:
        raise IOFailure(f"Failed to delete {target}: {describe_os_error(exc)}") from exc


@COMMAND_REGISTRY.command(
    "rm",
    description="Remove files or directories",
    usage="rm file... | rm -d directory... | rm -r path...",
)
def rm(shell: "Terminal", args: list[str]) -> CommandResult:
    mode = "file"
    targets = args
    if args and args[0] in ("-d", "--directory"):
        mode, targets = "empty-dir", args[1:]
    elif args and args[0] in ("-r", "-R", "--recursive"):
        mode, targets = "recursive", args[1:]
    if not targets:
        raise UsageError("rm expects at least one target")
    errors: list[ShellError] = []
    for name in targets:
        try:
            _remove(shell.resolve(name), mode)
        except ShellError as exc:
            errors.append(exc)
    return CommandResult.from_errors(errors)


def _copy_file(source: Path, dest: Path) -> None:
    if not source.exists():
        raise NotFoundError(f"Source file {source} does not exist")
    if source.is_dir():
        raise TypeMismatchError(f"Source {source} is a directory; use cp -r")
    if not source.is_file():
        raise TypeMismatchError(f"Source {source} is not a regular file")
    if dest.is_dir():
        dest = dest / source.name
    try:
        shutil.copyfile(source, dest)
    except OSError as exc:
        raise IOFailure(f"Failed to copy {source} to {dest}: {describe_os_error(exc)}") from exc
    logger.info("copied %s -> %s", source, dest)


def copy_tree(source: Path, dest: Path) -> list[ShellError]:
    """Copy the tree under ``source`` into ``dest``, entry by entry.

    Returns the failures; a failed entry does not stop the remaining ones.
    """

    if not source.exists():
        raise NotFoundError(f"Source directory {source} does not exist")
    if not source.is_dir():
        raise TypeMismatchError(f"Source {source} is not a directory; use cp without -r")
    root = source.resolve()
    dest = dest.resolve()
    errors: list[ShellError] = []

    def _prune(path: Path) -> bool:
        return path != root and path == dest

    def _onerror(exc: OSError) -> None:
        errors.append(IOFailure(f"Failed to read {exc.filename}: {describe_os_error(exc)}"))

    copied = 0
    for path in walk(root, prune=_prune if is_within(dest, root) else None, onerror=_onerror):
        target = dest.joinpath(path.relative_to(root))
        try:
            if path.is_dir():
                target.mkdir(parents=True, exist_ok=True)
            else:
                shutil.copyfile(path, target)
                copied += 1
        except OSError as exc:
            errors.append(IOFailure(f"Failed to copy {path}: {describe_os_error(exc)}"))
    logger.info("copied %d files from %s to %s (%d failures)", copied, root, dest, len(errors))
    return errors


@COMMAND_REGISTRY.command(
    "cp", description="Copy files and directories", usage="cp source dest | cp -r source dest"
)
def cp(shell: "Terminal", args: list[str]) -> CommandResult:
    if args and args[0] in ("-r", "-R", "--recursive"):
        if len(args) != 3:
            raise UsageError("Usage: cp -r <source> <destination>")
        errors = copy_tree(shell.resolve(args[1]), shell.resolve(args[2]))
        return CommandResult.from_errors(errors)
    if len(args) != 2:
        raise UsageError("Usage: cp <source> <destination>")
    _copy_file(shell.resolve(args[0]), shell.resolve(args[1]))
    return CommandResult()
