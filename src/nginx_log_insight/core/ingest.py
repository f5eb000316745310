"""Ingestion pipeline: locate sources, parse every line, keep what parses.

This module is the main integration point that turns a path into the
in-memory list of AccessRecord values used by filtering and trend analysis.
"""

from __future__ import annotations

import io
import logging
from collections import Counter
from contextlib import closing
from dataclasses import dataclass, field
from pathlib import Path

from .errors import LogSourceError, UnreadableEntryError
from .models import AccessRecord, FailureReason, LogSource, ParseFailure
from .parser import AccessLogParser, LineParser
from .sources import locate

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IngestStats:
    """Counters collected while ingesting a path."""

    sources_read: int = 0
    lines_read: int = 0
    lines_skipped: int = 0
    failure_counts: Counter[FailureReason] = field(default_factory=Counter)
    skipped_entries: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, object]:
        return {
            "sources_read": self.sources_read,
            "lines_read": self.lines_read,
            "lines_skipped": self.lines_skipped,
            "failure_counts": {r.value: n for r, n in sorted(self.failure_counts.items())},
            "skipped_entries": list(self.skipped_entries),
        }


@dataclass(frozen=True, slots=True)
class IngestReport:
    """Records from one ingestion run plus what was dropped along the way."""

    records: list[AccessRecord]
    stats: IngestStats


def _read_source(
    source: LogSource,
    *,
    parser: LineParser,
    stats: IngestStats,
    encoding: str,
    decode_errors: str,
) -> list[AccessRecord]:
    records: list[AccessRecord] = []
    # The wrapper must not close the underlying stream; the locator owns it.
    text = io.TextIOWrapper(source.stream, encoding=encoding, errors=decode_errors, newline="\n")
    try:
        for line_no, line in enumerate(text, start=1):
            stats.lines_read += 1
            result = parser.parse(line)
            if isinstance(result, ParseFailure):
                stats.lines_skipped += 1
                stats.failure_counts[result.reason] += 1
                logger.debug("%s:%d skipped (%s)", source.name, line_no, result.reason.value)
                continue
            records.append(result)
    finally:
        text.detach()
    return records


def ingest_report(
    path: str | Path,
    *,
    parser: LineParser | None = None,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> IngestReport:
    """Ingest a file or directory tree and report what was skipped.

    Unparseable lines and unreadable entries are dropped. A missing ``path``
    raises SourceNotFoundError and nothing is returned.
    """
    parser = parser or AccessLogParser()
    stats = IngestStats()
    records: list[AccessRecord] = []

    def on_error(error: LogSourceError) -> None:
        logger.warning("Skipping %s: %s", error.path, error)
        stats.skipped_entries.append(str(error.path))

    with closing(locate(path, on_error=on_error)) as sources:
        for source in sources:
            try:
                parsed = _read_source(
                    source,
                    parser=parser,
                    stats=stats,
                    encoding=encoding,
                    decode_errors=decode_errors,
                )
            except OSError as exc:
                on_error(UnreadableEntryError(source.name, exc.strerror or str(exc)))
                continue
            except UnicodeDecodeError as exc:
                on_error(UnreadableEntryError(source.name, str(exc)))
                continue
            stats.sources_read += 1
            records.extend(parsed)

    logger.info(
        "Ingested %d records from %d source(s); skipped %d line(s), %d entry(ies)",
        len(records),
        stats.sources_read,
        stats.lines_skipped,
        len(stats.skipped_entries),
    )
    return IngestReport(records=records, stats=stats)


def ingest(
    path: str | Path,
    *,
    parser: LineParser | None = None,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> list[AccessRecord]:
    """Return every parseable record under ``path`` in traversal order."""
    return ingest_report(
        path, parser=parser, encoding=encoding, decode_errors=decode_errors
    ).records
