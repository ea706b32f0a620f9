"""Navigation-oriented commands."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from ..common import CommandResult
from ..registry import COMMAND_REGISTRY
from ...exceptions import IOFailure, NotFoundError, TypeMismatchError, UsageError
from ...path_utils import canonical_directory, describe_os_error
from ...redirect import split_redirection, write_output

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Terminal

DIRECTORY_MARKER = "\\"


def _format_ls(entries: list[os.DirEntry[str]]) -> str:
    lines = []
    for idx, entry in enumerate(entries, start=1):
        marker = DIRECTORY_MARKER if entry.is_dir() else ""
        lines.append(f"{idx}-{entry.name}{marker}")
    return "".join(f"{line}\n" for line in lines)


def _list_directory(directory: Path) -> list[os.DirEntry[str]]:
    if not directory.exists():
        raise NotFoundError(f"Directory {directory} does not exist")
    if not directory.is_dir():
        raise TypeMismatchError(f"{directory} is not a directory")
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        raise IOFailure(f"Failed to list contents of {directory}: {describe_os_error(exc)}") from exc


@COMMAND_REGISTRY.command("pwd", description="Print working directory", usage="pwd [> file | >> file]")
def pwd(shell: "Terminal", args: list[str]) -> CommandResult:
    operands, target = split_redirection("pwd", args, shell.resolve)
    if operands:
        raise UsageError("pwd takes no arguments besides an output redirection")
    return write_output(shell.pwd() + "\n", target)


@COMMAND_REGISTRY.command("cd", description="Change directory", usage="cd [directory]")
def cd(shell: "Terminal", args: list[str]) -> CommandResult:
    if len(args) > 1:
        raise UsageError("cd expects at most one directory")
    target = shell.resolve(args[0]) if args else shell.home
    if not target.exists():
        raise NotFoundError(f"Directory {target} does not exist")
    if not target.is_dir():
        raise TypeMismatchError(f"{target} is not a directory")
    try:
        shell.cwd = canonical_directory(target)
    except OSError as exc:
        raise IOFailure(f"Failed to change directory to {target}: {describe_os_error(exc)}") from exc
    return CommandResult()


@COMMAND_REGISTRY.command(
    "ls", description="List directory contents", usage="ls [directory] [> file | >> file]"
)
def ls(shell: "Terminal", args: list[str]) -> CommandResult:
    operands, target = split_redirection("ls", args, shell.resolve)
    if len(operands) > 1:
        raise UsageError("ls expects at most one directory")
    directory = shell.resolve(operands[0]) if operands else shell.cwd
    entries = _list_directory(directory)
    return write_output(_format_ls(entries), target)
