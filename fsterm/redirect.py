"""Output redirection (``>`` and ``>>``) shared by text-producing commands."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .exceptions import IOFailure, UsageError
from .path_utils import describe_os_error
from .shell.common import CommandResult

logger = logging.getLogger(__name__)

REDIRECT_TRUNCATE = ">"
REDIRECT_APPEND = ">>"


@dataclass(frozen=True, slots=True)
class FileTarget:
    path: Path
    append: bool = False


# ``None`` stands for the console.
RedirectionTarget = FileTarget | None


def split_redirection(
    command: str,
    args: list[str],
    resolve: Callable[[str], Path],
) -> tuple[list[str], RedirectionTarget]:
    """Separate operands from a single ``> file`` / ``>> file`` directive.

    The operator may appear anywhere in ``args`` but must be followed by
    exactly one target token. Returns the remaining operands in order.
    """

    operands: list[str] = []
    target: RedirectionTarget = None
    idx = 0
    while idx < len(args):
        token = args[idx]
        if token in (REDIRECT_TRUNCATE, REDIRECT_APPEND):
            if target is not None:
                raise UsageError(f"{command}: only one output redirection is allowed")
            if idx + 1 >= len(args):
                raise UsageError(f"{command}: missing file name after '{token}'")
            target = FileTarget(resolve(args[idx + 1]), append=token == REDIRECT_APPEND)
            idx += 2
            continue
        operands.append(token)
        idx += 1
    return operands, target


def write_output(text: str, target: RedirectionTarget) -> CommandResult:
    """Send ``text`` to the console or to ``target``.

    A failed file write raises ``IOFailure``; the text is not echoed to the
    console in that case.
    """

    if target is None:
        return CommandResult(stdout=text)
    mode = "ab" if target.append else "wb"
    try:
        with open(target.path, mode) as handle:
            handle.write(text.encode("utf-8"))
    except OSError as exc:
        raise IOFailure(f"Cannot write to {target.path}: {describe_os_error(exc)}") from exc
    logger.debug("wrote %d characters to %s (append=%s)", len(text), target.path, target.append)
    return CommandResult()


__all__ = [
    "FileTarget",
    "RedirectionTarget",
    "REDIRECT_APPEND",
    "REDIRECT_TRUNCATE",
    "split_redirection",
    "write_output",
]
