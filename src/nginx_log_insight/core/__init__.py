"""Access-log ingestion, filtering and trend analysis."""

from __future__ import annotations

from .errors import (
    DecompressionError,
    LogSourceError,
    SourceNotFoundError,
    UnreadableEntryError,
    UnsupportedEntryError,
)
from .filters import FilterCriteria, MatchMode, filter_records, matches
from .ingest import IngestReport, IngestStats, ingest, ingest_report
from .models import AccessRecord, FailureReason, LogSource, ParseFailure
from .parser import AccessLogParser, LineParser, parse_line
from .sources import locate
from .trends import aggregate_by_day, sorted_trend

__all__ = [
    "AccessLogParser",
    "AccessRecord",
    "DecompressionError",
    "FailureReason",
    "FilterCriteria",
    "IngestReport",
    "IngestStats",
    "LineParser",
    "LogSource",
    "LogSourceError",
    "MatchMode",
    "ParseFailure",
    "SourceNotFoundError",
    "UnreadableEntryError",
    "UnsupportedEntryError",
    "aggregate_by_day",
    "filter_records",
    "ingest",
    "ingest_report",
    "locate",
    "matches",
    "parse_line",
    "sorted_trend",
]
