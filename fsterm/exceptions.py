"""Exception hierarchy for fsterm commands."""

from __future__ import annotations


class ShellError(Exception):
    """Base class for errors reported back to the user."""

    exit_code = 1


class UsageError(ShellError):
    """Wrong argument count or unsupported flags."""

    exit_code = 2


class NotFoundError(ShellError):
    pass


class TypeMismatchError(ShellError):
    """Expected a file but got a directory, or the other way around."""


class AlreadyExistsError(ShellError):
    pass


class NotEmptyError(ShellError):
    pass


class IOFailure(ShellError):
    """Underlying read, write, create or delete failed."""


class ArchiveError(IOFailure):
    pass


__all__ = [
    "ShellError",
    "UsageError",
    "NotFoundError",
    "TypeMismatchError",
    "AlreadyExistsError",
    "NotEmptyError",
    "IOFailure",
    "ArchiveError",
]
