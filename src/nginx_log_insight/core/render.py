"""Plain-text table rendering for records and daily trends."""

from __future__ import annotations

from collections.abc import Sequence

from .models import AccessRecord
from .trends import sorted_trend

RECORD_HEADERS = (
    "Remote Address",
    "Remote User",
    "Request Time",
    "Request",
    "Status",
    "Body Bytes Sent",
    "HTTP Referer",
    "HTTP User Agent",
)
TREND_HEADERS = ("Date", "Requests")
MAX_CELL_WIDTH = 60


def _clip(value: str, width: int) -> str:
    if len(value) <= width:
        return value
    return value[: width - 3] + "..."


def format_table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    """Render rows as an ASCII table with a header rule."""
    cells = [[_clip(str(c), MAX_CELL_WIDTH) for c in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, c in enumerate(row):
            widths[i] = max(widths[i], len(c))

    rule = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(values: Sequence[str]) -> str:
        return "| " + " | ".join(v.ljust(w) for v, w in zip(values, widths)) + " |"

    out = [rule, line(list(headers)), rule]
    out.extend(line(row) for row in cells)
    out.append(rule)
    return "\n".join(out)


def format_records(records: Sequence[AccessRecord]) -> str:
    rows = [
        (
            r.client_addr,
            r.remote_user or "-",
            r.timestamp.isoformat(),
            r.request,
            r.status,
            r.body_bytes,
            r.referer,
            r.user_agent,
        )
        for r in records
    ]
    return format_table(RECORD_HEADERS, rows)


def format_trend(trend: dict[str, int]) -> str:
    return format_table(TREND_HEADERS, sorted_trend(trend))
