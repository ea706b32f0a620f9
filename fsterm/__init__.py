"""fsterm package: a small POSIX-style file-management shell."""

from .archive import ArchiveSource, create_archive, extract_archive
from .exceptions import (
    AlreadyExistsError,
    ArchiveError,
    IOFailure,
    NotEmptyError,
    NotFoundError,
    ShellError,
    TypeMismatchError,
    UsageError,
)
from .path_utils import resolve_path
from .redirect import FileTarget, split_redirection, write_output
from .shell import CommandResult, Terminal
from .shell_parser import CommandLine, parse_command_line
from .walker import walk

__all__ = [
    "Terminal",
    "CommandResult",
    "CommandLine",
    "parse_command_line",
    "resolve_path",
    "walk",
    "FileTarget",
    "split_redirection",
    "write_output",
    "ArchiveSource",
    "create_archive",
    "extract_archive",
    "ShellError",
    "UsageError",
    "NotFoundError",
    "TypeMismatchError",
    "AlreadyExistsError",
    "NotEmptyError",
    "IOFailure",
    "ArchiveError",
]
