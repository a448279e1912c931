"""Exception types shared across treefind."""

from __future__ import annotations

from pathlib import Path


class TreefindError(Exception):
    pass


class CompileError(TreefindError, ValueError):
    """The search pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class ReadError(TreefindError):
    """A directory could not be enumerated."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class LaunchError(TreefindError):
    """The OS opener could not be started for a path."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open {path}: {reason}")
