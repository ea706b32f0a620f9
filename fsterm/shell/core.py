"""Core Terminal implementation."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TextIO

from ..exceptions import IOFailure, ShellError
from ..path_utils import canonical_directory, describe_os_error, resolve_path
from .common import CommandHandler, CommandResult, ShellCommand
from .registry import COMMAND_REGISTRY

logger = logging.getLogger(__name__)


class Terminal:
    """Runs file-management commands against the host filesystem.

    The working directory lives on the instance; only ``cd`` changes it.
    """

    def __init__(
        self,
        cwd: str | os.PathLike[str] | None = None,
        *,
        home: str | os.PathLike[str] | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.home = Path(home) if home is not None else Path.home()
        self.stdout = stdout
        self.stderr = stderr
        self.commands: dict[str, CommandHandler] = {}
        self.command_docs: dict[str, str] = {}
        self.command_usage: dict[str, str] = {}
        self.cwd = self._initial_directory(cwd)
        self._register_builtin_commands()

    def _initial_directory(self, cwd: str | os.PathLike[str] | None) -> Path:
        try:
            return canonical_directory(Path(cwd) if cwd is not None else Path.cwd())
        except OSError as exc:
            logger.warning("cannot use %s as working directory (%s); using %s", cwd, exc, self.home)
        try:
            return canonical_directory(self.home)
        except OSError as exc:
            raise IOFailure(
                f"Home directory {self.home} is not usable: {describe_os_error(exc)}"
            ) from exc

    # ------------------------------------------------------------------
    # Command registration
    # ------------------------------------------------------------------
    def register_command(
        self,
        name: str,
        handler: CommandHandler,
        *,
        description: str = "",
        usage: str = "",
    ) -> None:
        key = name.lower()
        self.commands[key] = handler
        if description:
            self.command_docs[key] = description
        if usage:
            self.command_usage[key] = usage

    def available_commands(self) -> list[str]:
        return sorted(self.commands)

    def _bind_registered_handler(self, func: ShellCommand) -> CommandHandler:
        def bound(args: list[str]) -> CommandResult | str | None:
            return func(self, args)

        return bound

    def _register_builtin_commands(self) -> None:
        # Import command modules for their side effects (registration)
        from . import commands  # noqa: F401

        for spec in COMMAND_REGISTRY.iter_commands():
            self.register_command(
                spec.name,
                self._bind_registered_handler(spec.handler),
                description=spec.description,
                usage=spec.usage,
            )

    # ------------------------------------------------------------------
    # Working directory
    # ------------------------------------------------------------------
    def resolve(self, raw: str) -> Path:
        return resolve_path(raw, self.cwd)

    def pwd(self) -> str:
        return str(self.cwd)

    # ------------------------------------------------------------------
    # Dispatcher
    # ------------------------------------------------------------------
    def execute(self, name: str, args: list[str]) -> CommandResult:
        """Run one command and return its captured output."""

        handler = self.commands.get(name.lower())
        if handler is None:
            return CommandResult(stderr=f"Unknown command: {name}", exit_code=127)
        logger.debug("dispatching %s %s (cwd=%s)", name, args, self.cwd)
        try:
            result = handler(list(args))
        except ShellError as exc:
            return CommandResult(stderr=str(exc), exit_code=exc.exit_code)
        except Exception as exc:  # unexpected failure path
            logger.debug("%s raised", name, exc_info=True)
            return CommandResult(stderr=f"{name} failed: {exc}", exit_code=1)
        if isinstance(result, CommandResult):
            return result
        if result is None:
            return CommandResult()
        return CommandResult(stdout=str(result))

    def dispatch(self, name: str, args: list[str]) -> CommandResult:
        """Run one command and write its output to the console streams."""

        result = self.execute(name, args)
        self.emit(result)
        return result

    def emit(self, result: CommandResult) -> None:
        out = self.stdout or sys.stdout
        err = self.stderr or sys.stderr
        if result.stdout:
            out.write(result.stdout if result.stdout.endswith("\n") else result.stdout + "\n")
            out.flush()
        if result.stderr:
            err.write(result.stderr if result.stderr.endswith("\n") else result.stderr + "\n")
            err.flush()


__all__ = ["Terminal"]
