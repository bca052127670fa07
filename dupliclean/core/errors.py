# dupliclean/core/errors.py
from typing import Optional


class DupliCleanError(Exception):
    """Base class for errors tied to a single filesystem path."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason or "unknown error"
        super().__init__(f"{self.path}: {self.reason}")


class TraversalError(DupliCleanError):
    """A directory could not be listed while scanning."""


class ReadError(DupliCleanError):
    """A file could not be read or hashed."""


class DeletionError(DupliCleanError):
    """A file or directory could not be deleted."""
