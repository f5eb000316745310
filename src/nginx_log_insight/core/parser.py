"""Record parser: one raw line -> AccessRecord or ParseFailure."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from .grammar import (
    COMBINED_LOG_PATTERN,
    EMPTY_FIELD,
    STATUS_MAX,
    STATUS_MIN,
    TIMESTAMP_FORMAT,
)
from .models import AccessRecord, FailureReason, ParseFailure


class LineParser(Protocol):
    """Parser interface used by ingestion."""

    def parse(self, line: str) -> AccessRecord | ParseFailure:
        """Parse one line; failures are returned, not raised."""
        ...


def _parse_status(token: str) -> int | None:
    if len(token) != 3 or not token.isascii() or not token.isdigit():
        return None
    status = int(token)
    if not STATUS_MIN <= status <= STATUS_MAX:
        return None
    return status


def _parse_timestamp(token: str) -> datetime | None:
    try:
        ts = datetime.strptime(token, TIMESTAMP_FORMAT)
    except ValueError:
        return None
    # %z is mandatory in the format, but keep the guarantee explicit.
    if ts.tzinfo is None:
        return None
    return ts


def parse_line(line: str) -> AccessRecord | ParseFailure:
    """Parse a combined-log-format line.

    A trailing newline (``\\n`` or ``\\r\\n``) is ignored. Malformed input is
    reported as a ParseFailure carrying the original line.
    """
    text = line.rstrip("\r\n")
    m = COMBINED_LOG_PATTERN.match(text)
    if not m:
        return ParseFailure(reason=FailureReason.MALFORMED_STRUCTURE, raw_line=line)

    status = _parse_status(m.group("status"))
    if status is None:
        return ParseFailure(reason=FailureReason.INVALID_STATUS, raw_line=line)

    ts = _parse_timestamp(m.group("timestamp"))
    if ts is None:
        return ParseFailure(reason=FailureReason.INVALID_TIMESTAMP, raw_line=line)

    size_raw = m.group("body_bytes")
    body_bytes = 0 if size_raw == EMPTY_FIELD else int(size_raw)

    remote_user = m.group("remote_user")

    return AccessRecord(
        client_addr=m.group("client_addr"),
        remote_user=None if remote_user == EMPTY_FIELD else remote_user,
        timestamp=ts,
        method=m.group("method"),
        path=m.group("path"),
        protocol=m.group("protocol"),
        status=status,
        body_bytes=body_bytes,
        referer=m.group("referer"),
        user_agent=m.group("user_agent"),
    )


@dataclass(frozen=True, slots=True)
class AccessLogParser:
    """Parse Nginx combined-format access log lines."""

    def parse(self, line: str) -> AccessRecord | ParseFailure:
        return parse_line(line)
