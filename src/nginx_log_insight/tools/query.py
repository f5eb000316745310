"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import os
from typing import Any

from nginx_log_insight.core.date_window import resolve_date_range
from nginx_log_insight.core.filters import FilterCriteria, MatchMode, filter_records
from nginx_log_insight.core.ingest import ingest_report
from nginx_log_insight.core.models import AccessRecord
from nginx_log_insight.core.trends import aggregate_by_day, sorted_trend

DEFAULT_LIMIT = 200
DEFAULT_HARD_LIMIT = 5000
HARD_LIMIT_ENV = "NGINX_INSIGHT_MAX_RESULTS"


def _hard_limit() -> int:
    env = os.getenv(HARD_LIMIT_ENV)
    if env is None or env == "":
        return DEFAULT_HARD_LIMIT
    try:
        value = int(env)
    except ValueError as exc:
        raise ValueError(f"{HARD_LIMIT_ENV} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{HARD_LIMIT_ENV} must be >= 1")
    return value


def record_to_dict(record: AccessRecord) -> dict[str, Any]:
    """Convert an AccessRecord into a JSON-serializable dict."""
    return {
        "client_addr": record.client_addr,
        "remote_user": record.remote_user,
        "timestamp": record.timestamp.isoformat(),
        "method": record.method,
        "path": record.path,
        "protocol": record.protocol,
        "status": record.status,
        "body_bytes": record.body_bytes,
        "referer": record.referer,
        "user_agent": record.user_agent,
    }


def build_criteria(
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    date: str | None = None,
    week: str | None = None,
    month: str | None = None,
    year: str | None = None,
    status: int | None = None,
    referer: str | None = None,
    path: str | None = None,
    match_mode: MatchMode = "exact",
) -> FilterCriteria:
    """Translate loose tool arguments into validated FilterCriteria.

    Date selector precedence: date > week > month > year > start/end dates.
    """
    start, end = resolve_date_range(
        start_date=start_date,
        end_date=end_date,
        date_=date,
        week=week,
        month=month,
        year=year,
    )
    return FilterCriteria(
        start_date=start,
        end_date=end,
        status=status,
        referer=referer,
        path=path,
        match_mode=match_mode,
    )


def query_access_logs_impl(
    *,
    log_path: str,
    start_date: str | None = None,
    end_date: str | None = None,
    date: str | None = None,
    week: str | None = None,
    month: str | None = None,
    year: str | None = None,
    status: int | None = None,
    referer: str | None = None,
    path: str | None = None,
    match_mode: MatchMode = "exact",
    limit: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `query_access_logs` MCP tool."""
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    limit = min(limit, _hard_limit())

    criteria = build_criteria(
        start_date=start_date,
        end_date=end_date,
        date=date,
        week=week,
        month=month,
        year=year,
        status=status,
        referer=referer,
        path=path,
        match_mode=match_mode,
    )
    report = ingest_report(log_path)
    matched = filter_records(report.records, criteria)
    entries = matched[:limit]

    return {
        "count": len(entries),
        "total_matched": len(matched),
        "entries": [record_to_dict(r) for r in entries],
        "stats": report.stats.as_dict(),
    }


def access_log_trends_impl(
    *,
    log_path: str,
    start_date: str | None = None,
    end_date: str | None = None,
    date: str | None = None,
    week: str | None = None,
    month: str | None = None,
    year: str | None = None,
    status: int | None = None,
    referer: str | None = None,
    path: str | None = None,
    match_mode: MatchMode = "exact",
) -> dict[str, Any]:
    """Implementation for the `access_log_trends` MCP tool."""
    criteria = build_criteria(
        start_date=start_date,
        end_date=end_date,
        date=date,
        week=week,
        month=month,
        year=year,
        status=status,
        referer=referer,
        path=path,
        match_mode=match_mode,
    )
    report = ingest_report(log_path)
    trend = aggregate_by_day(filter_records(report.records, criteria))

    return {
        "total": sum(trend.values()),
        "days": [{"date": day, "count": count} for day, count in sorted_trend(trend)],
    }
