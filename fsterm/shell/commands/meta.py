"""Meta commands for shell introspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..common import CommandResult
from ..registry import COMMAND_REGISTRY
from ...exceptions import UsageError
from ...redirect import split_redirection, write_output

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Terminal


@COMMAND_REGISTRY.command("help", description="Show available commands", usage="help [command...]")
def help(shell: "Terminal", args: list[str]) -> CommandResult:  # noqa: A001
    names, target = split_redirection("help", args, shell.resolve)
    names = [name.lower() for name in names]
    unknown = [name for name in names if name not in shell.commands]
    if unknown:
        raise UsageError(f"help: no such command: {', '.join(unknown)}")
    lines = [] if names else ["Available commands:"]
    for name in names or shell.available_commands():
        desc = shell.command_docs.get(name, "")
        line = f"  {name} - {desc}" if desc else f"  {name}"
        usage = shell.command_usage.get(name)
        if usage:
            line += f" (usage: {usage})"
        lines.append(line)
    if not names:
        lines.append("Type exit to leave the shell.")
    return write_output("\n".join(lines) + "\n", target)
