"""Logging setup shared by the CLI and the MCP server."""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "NGINX_INSIGHT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level_name: str | None = None, *, default: str = "INFO") -> None:
    """Configure stderr logging from an explicit level or the environment.

    The MCP client typically captures stderr; keeping logs concise makes them easier to consume.
    """
    name = (level_name or os.getenv(LOG_LEVEL_ENV) or default).upper()
    level = getattr(logging, name, None)
    if not isinstance(level, int):
        level = getattr(logging, default)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
