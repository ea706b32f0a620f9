"""Text processing commands."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..common import CommandResult
from ..registry import COMMAND_REGISTRY
from ...exceptions import IOFailure, NotFoundError, ShellError, TypeMismatchError, UsageError
from ...path_utils import describe_os_error
from ...redirect import REDIRECT_APPEND, REDIRECT_TRUNCATE, split_redirection, write_output

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Terminal


def read_text(path: Path) -> str:
    if not path.exists():
        raise NotFoundError(f"File {path} does not exist")
    if path.is_dir():
        raise TypeMismatchError(f"{path} is a directory")
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise IOFailure(
            f"Failed to read {path}: not valid UTF-8 text ({exc.reason} at byte {exc.start})"
        ) from exc
    except OSError as exc:
        raise IOFailure(f"Failed to read {path}: {describe_os_error(exc)}") from exc


@dataclass(frozen=True, slots=True)
class TextCounts:
    lines: int
    words: int
    chars: int

    @classmethod
    def of(cls, content: str) -> "TextCounts":
        # only \n, \r and \r\n end a line
        lines = [line.removesuffix("\n") for line in io.StringIO(content, newline=None)]
        return cls(
            lines=len(lines),
            words=sum(len(line.split()) for line in lines),
            # line breaks between lines count, the terminating one does not
            chars=len("\n".join(lines)),
        )


@COMMAND_REGISTRY.command(
    "cat",
    description="Print or concatenate files",
    usage="cat file [file] [> out | >> out]",
)
def cat(shell: "Terminal", args: list[str]) -> CommandResult:
    if args and args[0] in (REDIRECT_TRUNCATE, REDIRECT_APPEND):
        raise UsageError("cat: the first argument must be an input file")
    inputs, target = split_redirection("cat", args, shell.resolve)
    if not inputs:
        raise UsageError("cat expects one or two input files")
    if len(inputs) > 2:
        raise UsageError("cat: too many arguments")
    errors: list[ShellError] = []
    blobs: list[str] = []
    for name in inputs:
        try:
            content = read_text(shell.resolve(name))
        except ShellError as exc:
            errors.append(exc)
            continue
        if content and not content.endswith("\n"):
            content += "\n"
        blobs.append(content)
    if not blobs:
        return CommandResult.from_errors(errors)
    try:
        written = write_output("".join(blobs), target)
    except ShellError as exc:
        errors.append(exc)
        return CommandResult.from_errors(errors)
    return CommandResult.from_errors(errors, stdout=written.stdout)


@COMMAND_REGISTRY.command(
    "wc", description="Count lines, words and characters", usage="wc file [> out | >> out]"
)
def wc(shell: "Terminal", args: list[str]) -> CommandResult:
    operands, target = split_redirection("wc", args, shell.resolve)
    if not operands:
        raise UsageError("wc expects a file")
    if len(operands) > 1:
        raise UsageError("wc: too many arguments")
    counts = TextCounts.of(read_text(shell.resolve(operands[0])))
    return write_output(f"{counts.lines} {counts.words} {counts.chars} {operands[0]}\n", target)
