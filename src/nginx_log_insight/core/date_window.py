"""Date-window parsing helpers.

Converts user-friendly selectors (day, ISO week, month, year) into inclusive
(start_date, end_date) ranges for FilterCriteria.
"""

from __future__ import annotations

import re
from datetime import date, timedelta

_WEEK_RE = re.compile(r"^(?P<y>\d{4})-W(?P<w>\d{2})$")
_MONTH_RE = re.compile(r"^(?P<y>\d{4})-(?P<m>\d{2})$")
_YEAR_RE = re.compile(r"^(?P<y>\d{4})$")


def parse_iso_date(s: str) -> date:
    """Parse a YYYY-MM-DD date."""
    try:
        return date.fromisoformat(s.strip())
    except ValueError as e:
        raise ValueError(f"date must look like YYYY-MM-DD (got {s!r})") from e


def range_for_week(s: str) -> tuple[date, date]:
    """Return the Monday..Sunday range for a YYYY-Www selector."""
    m = _WEEK_RE.match(s)
    if not m:
        raise ValueError("week must look like YYYY-Www (e.g., 2024-W01)")
    start = date.fromisocalendar(int(m.group("y")), int(m.group("w")), 1)  # Monday
    return start, start + timedelta(days=6)


def range_for_month(s: str) -> tuple[date, date]:
    """Return the first..last day range for a YYYY-MM selector."""
    m = _MONTH_RE.match(s)
    if not m:
        raise ValueError("month must look like YYYY-MM (e.g., 2024-01)")
    y = int(m.group("y"))
    mo = int(m.group("m"))
    start = date(y, mo, 1)
    if mo == 12:
        end = date(y + 1, 1, 1)
    else:
        end = date(y, mo + 1, 1)
    return start, end - timedelta(days=1)


def range_for_year(s: str) -> tuple[date, date]:
    """Return Jan 1..Dec 31 for a YYYY selector."""
    m = _YEAR_RE.match(s)
    if not m:
        raise ValueError("year must look like YYYY (e.g., 2024)")
    y = int(m.group("y"))
    return date(y, 1, 1), date(y, 12, 31)


def resolve_date_range(
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    date_: str | None = None,
    week: str | None = None,
    month: str | None = None,
    year: str | None = None,
) -> tuple[date | None, date | None]:
    """Resolve an inclusive date range; selectors win over explicit bounds."""
    if date_:
        d = parse_iso_date(date_)
        return d, d
    if week:
        return range_for_week(week)
    if month:
        return range_for_month(month)
    if year:
        return range_for_year(year)

    start = parse_iso_date(start_date) if start_date else None
    end = parse_iso_date(end_date) if end_date else None
    return start, end
