"""Errors raised while locating log sources.

Only SourceNotFoundError is fatal; the others describe a single entry that the
locator skips before moving on to the next one.
"""

from __future__ import annotations

from pathlib import Path


class LogSourceError(Exception):
    """Base class for source-level failures."""

    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(message)
        self.path = Path(path)


class SourceNotFoundError(LogSourceError, FileNotFoundError):
    """The top-level path does not exist."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(path, f"Log path not found: {path}")


class UnsupportedEntryError(LogSourceError):
    """Entry is neither a regular file nor a directory (broken link, FIFO, ...)."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(path, f"Unsupported entry (not a file or directory): {path}")


class DecompressionError(LogSourceError):
    """A file with a recognized compressed suffix could not be decompressed."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(path, f"Could not decompress {path}: {reason}")


class UnreadableEntryError(LogSourceError):
    """Entry exists but could not be opened or listed."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(path, f"Could not read {path}: {reason}")
