"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from nginx_log_insight.core.filters import FilterCriteria
from nginx_log_insight.core.grammar import COMBINED_LOG_PATTERN

SAMPLE_LOG = (
    '203.0.113.10 - - [01/Jan/2024:08:12:01 +0000] "GET / HTTP/1.1" 200 612 "-" "curl/8.4.0"\n'
    '203.0.113.11 - - [01/Jan/2024:08:12:03 +0000] "GET /about HTTP/1.1" 200 1024 '
    '"https://example.com/" "Mozilla/5.0"\n'
    '198.51.100.7 - - [02/Jan/2024:09:00:00 +0000] "GET /missing HTTP/1.1" 404 153 "-" "Mozilla/5.0"\n'
)


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://nginx-log-insight/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://nginx-log-insight/help\n"
            "- app://nginx-log-insight/examples/sample-log\n"
            "- app://nginx-log-insight/schemas/filter-criteria\n"
            "- app://nginx-log-insight/config/line-pattern\n"
            "\nTools: query_access_logs, access_log_trends "
            "(log_path may be a file, a .gz file or a directory)\n"
        )

    @mcp.resource("app://nginx-log-insight/examples/sample-log")
    def sample_log() -> str:
        """Return a tiny combined-format log for demos and tests."""
        return SAMPLE_LOG

    @mcp.resource("app://nginx-log-insight/schemas/filter-criteria")
    def filter_criteria_schema() -> dict[str, Any]:
        """Return the JSON schema for filter criteria."""
        return FilterCriteria.model_json_schema()

    @mcp.resource("app://nginx-log-insight/config/line-pattern")
    def line_pattern() -> str:
        """Return the regular expression used to recognize log lines."""
        return COMBINED_LOG_PATTERN.pattern
