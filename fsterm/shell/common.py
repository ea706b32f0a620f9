"""Shared shell types."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..exceptions import ShellError
    from .core import Terminal


@dataclass(slots=True)
class CommandResult:
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @classmethod
    def from_errors(cls, errors: Iterable["ShellError"], *, stdout: str = "") -> "CommandResult":
        """Combine per-target failures of a multi-target command."""

        errors = list(errors)
        if not errors:
            return cls(stdout=stdout)
        return cls(
            stdout=stdout,
            stderr="\n".join(str(error) for error in errors),
            exit_code=max(error.exit_code for error in errors),
        )


CommandHandler = Callable[[list[str]], CommandResult | str | None]
ShellCommand = Callable[["Terminal", list[str]], CommandResult | str | None]


__all__ = ["CommandResult", "CommandHandler", "ShellCommand"]
