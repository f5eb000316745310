"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: record queries and daily trends over an access-log path
- Resources: help text, a sample log and the filter-criteria schema

Run locally (stdio):
    python -m nginx_log_insight.server.log_server
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from nginx_log_insight.core.filters import MatchMode
from nginx_log_insight.log_config import configure_logging
from nginx_log_insight.resources.registry import register_resources
from nginx_log_insight.tools.query import access_log_trends_impl, query_access_logs_impl

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("nginx-log-insight", json_response=True)

register_resources(mcp)


@mcp.tool()
def query_access_logs(
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
    """Return access-log records matching every given filter.

    Parameters
    ----------
    log_path:
        A log file, a gzip-compressed log (.gz) or a directory walked recursively.
    start_date/end_date:
        Inclusive YYYY-MM-DD bounds on the request date (time of day ignored).
    date/week/month/year:
        Convenience selectors that replace start_date/end_date.
        Examples: 2024-01-01, 2024-W01, 2024-01, 2024.
    status:
        Exact HTTP status code.
    referer/path:
        Referer and requested path to match.
    match_mode:
        "exact" (default) or "contains" for referer/path comparison.
    limit:
        Maximum number of entries returned (hard-capped in the implementation).

    Returns
    -------
    dict:
        {"count": int, "total_matched": int, "entries": list[dict], "stats": dict}
    """
    return query_access_logs_impl(
        log_path=log_path,
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
        limit=limit,
    )


@mcp.tool()
def access_log_trends(
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
    """Return per-day request counts for records matching every given filter.

    Accepts the same filters as `query_access_logs`.

    Returns
    -------
    dict:
        {"total": int, "days": [{"date": "YYYY-MM-DD", "count": int}, ...]}
    """
    return access_log_trends_impl(
        log_path=log_path,
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


def main() -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
