"""Command engine package."""

from .common import CommandResult
from .core import Terminal

__all__ = ["Terminal", "CommandResult"]
