"""Split an input line into a command name and its arguments."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field

from .exceptions import UsageError


@dataclass
class CommandLine:
    name: str
    args: list[str] = field(default_factory=list)


def parse_command_line(line: str) -> CommandLine | None:
    """Return the parsed command, or ``None`` for a blank line.

    Tokens are whitespace separated; quotes group words containing spaces.
    ``>`` and ``>>`` are ordinary tokens interpreted by each command.
    """

    try:
        tokens = shlex.split(line, comments=False, posix=True)
    except ValueError as exc:
        raise UsageError(f"Cannot parse command line: {exc}") from exc
    if not tokens:
        return None
    name, *args = tokens
    return CommandLine(name=name, args=args)


__all__ = ["CommandLine", "parse_command_line"]
