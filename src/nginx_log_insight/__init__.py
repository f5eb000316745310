"""nginx-log-insight: query and trend analysis over Nginx access logs."""

from __future__ import annotations

__version__ = "0.1.0"
