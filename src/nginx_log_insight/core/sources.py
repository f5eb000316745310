"""Source locator: resolve a file or directory into readable byte streams.

Directories are walked depth-first with entries sorted by name at every level,
so the same tree always produces the same source order. Gzip files (``.gz``)
are decompressed into an anonymous temporary file before being handed out; the
temporary file lives only until the consumer moves on to the next source.
"""

from __future__ import annotations

import gzip
import logging
import shutil
import tempfile
import zlib
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from .errors import (
    DecompressionError,
    LogSourceError,
    SourceNotFoundError,
    UnreadableEntryError,
    UnsupportedEntryError,
)
from .models import LogSource

logger = logging.getLogger(__name__)

COMPRESSED_SUFFIXES = frozenset({".gz"})
_COPY_CHUNK = 1024 * 1024

ErrorHandler = Callable[[LogSourceError], None]


def _log_and_skip(error: LogSourceError) -> None:
    logger.warning("Skipping %s: %s", error.path, error)


def is_compressed(path: Path) -> bool:
    """True when the file suffix marks a recognized compressed format."""
    return path.suffix.lower() in COMPRESSED_SUFFIXES


def _reason(exc: BaseException) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc) or type(exc).__name__


@contextmanager
def _decompressed(path: Path) -> Iterator[BinaryIO]:
    """Decompress a gzip file into a temporary file, removed on exit."""
    with tempfile.TemporaryFile(prefix="nginx-log-insight-") as tmp:
        try:
            raw = path.open("rb")
        except OSError as exc:
            raise UnreadableEntryError(path, _reason(exc)) from exc

        with raw, gzip.GzipFile(fileobj=raw, mode="rb") as gz:
            try:
                shutil.copyfileobj(gz, tmp, _COPY_CHUNK)
            except (OSError, EOFError, zlib.error) as exc:
                raise DecompressionError(path, _reason(exc)) from exc

        tmp.seek(0)
        yield tmp


@contextmanager
def open_source(path: Path) -> Iterator[LogSource]:
    """Open one regular file as a LogSource (decompressing when needed)."""
    if is_compressed(path):
        with _decompressed(path) as stream:
            yield LogSource(name=str(path), stream=stream, compressed=True)
        return

    try:
        f = path.open("rb")
    except OSError as exc:
        raise UnreadableEntryError(path, _reason(exc)) from exc
    with f:
        yield LogSource(name=str(path), stream=f, compressed=False)


def _sorted_children(directory: Path, *, on_error: ErrorHandler) -> list[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        on_error(UnreadableEntryError(directory, _reason(exc)))
        return []


def iter_files(root: Path, *, on_error: ErrorHandler) -> Iterator[Path]:
    """Yield regular files under ``root`` depth-first, sorted by name.

    The walk keeps its own stack, so tree depth is not bounded by the
    interpreter recursion limit.
    """
    # Children are pushed in reverse so the smallest name is popped first.
    stack = list(reversed(_sorted_children(root, on_error=on_error)))
    while stack:
        child = stack.pop()
        if child.is_symlink() and child.is_dir():
            # Linked directories are not followed; they can form cycles.
            logger.debug("Not following directory symlink %s", child)
            continue
        if child.is_dir():
            stack.extend(reversed(_sorted_children(child, on_error=on_error)))
        elif child.is_file():
            yield child
        else:
            on_error(UnsupportedEntryError(child))


def _iter_sources(files: Iterator[Path], *, on_error: ErrorHandler) -> Iterator[LogSource]:
    for file_path in files:
        try:
            with open_source(file_path) as source:
                yield source
        except LogSourceError as exc:
            on_error(exc)


def _iter_root(root: Path, *, on_error: ErrorHandler) -> Iterator[Path]:
    if root.is_dir():
        yield from iter_files(root, on_error=on_error)
    elif root.is_file():
        yield root
    else:
        # Dangling link, FIFO, socket or device.
        on_error(UnsupportedEntryError(root))


def locate(path: str | Path, *, on_error: ErrorHandler | None = None) -> Iterator[LogSource]:
    """Resolve ``path`` into a lazy sequence of LogSource streams.

    Raises SourceNotFoundError immediately when ``path`` does not exist. Every
    other problem concerns a single entry: it is passed to ``on_error`` (which
    logs a warning by default) and the walk continues.

    Each yielded stream is only valid until the next item is requested or the
    iterator is closed.
    """
    root = Path(path)
    if not root.exists() and not root.is_symlink():
        raise SourceNotFoundError(root)

    report = on_error or _log_and_skip
    return _iter_sources(_iter_root(root, on_error=report), on_error=report)
