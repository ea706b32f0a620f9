"""Command-line interface for fsterm."""

from __future__ import annotations

import argparse
import logging

from .exceptions import ShellError
from .shell import CommandResult, Terminal
from .shell_parser import parse_command_line

EXIT_WORDS = {"exit", "quit", ":q"}


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--cwd",
        default=None,
        help="Start in this directory instead of the process working directory.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity for diagnostic messages (default: WARNING).",
    )


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_line(terminal: Terminal, line: str) -> CommandResult:
    try:
        parsed = parse_command_line(line)
    except ShellError as exc:
        result = CommandResult(stderr=str(exc), exit_code=exc.exit_code)
        terminal.emit(result)
        return result
    if parsed is None:
        return CommandResult()
    return terminal.dispatch(parsed.name, parsed.args)


def _run_exec(args: argparse.Namespace) -> int:
    terminal = Terminal(args.cwd)
    return run_line(terminal, args.command).exit_code


def _run_shell(args: argparse.Namespace) -> int:
    terminal = Terminal(args.cwd)
    try:
        while True:
            line = input(f"{terminal.pwd()}> ")
            if line.strip().lower() in EXIT_WORDS:
                print("Terminating!")
                return 0
            run_line(terminal, line)
    except (EOFError, KeyboardInterrupt):
        print()
        return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="fsterm")
    subparsers = parser.add_subparsers(dest="command_name", required=True)

    exec_parser = subparsers.add_parser("exec", help="Run a single command")
    _add_common_flags(exec_parser)
    exec_parser.add_argument("command", help="Command line to execute")
    exec_parser.set_defaults(func=_run_exec)

    shell_parser = subparsers.add_parser("shell", help="Start an interactive shell")
    _add_common_flags(shell_parser)
    shell_parser.set_defaults(func=_run_shell)

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    exit_code = args.func(args)
    raise SystemExit(exit_code)


__all__ = ["main", "run_line"]
