"""Trend aggregation: request counts per calendar day."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from .models import AccessRecord


def aggregate_by_day(records: Iterable[AccessRecord]) -> dict[str, int]:
    """Count records per YYYY-MM-DD day of their own timestamp offset.

    Days without records are absent. The mapping carries no ordering
    guarantee; use sorted_trend() for display.
    """
    counts = Counter(r.day.isoformat() for r in records)
    return dict(counts)


def sorted_trend(trend: dict[str, int]) -> list[tuple[str, int]]:
    """Return (day, count) pairs in chronological order."""
    return sorted(trend.items())
