"""Core data models for access-log analysis."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import BinaryIO


class FailureReason(str, Enum):
    """Why a single line could not be turned into an AccessRecord."""

    MALFORMED_STRUCTURE = "MALFORMED_STRUCTURE"
    INVALID_STATUS = "INVALID_STATUS"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"


@dataclass(frozen=True, slots=True)
class AccessRecord:
    """One parsed combined-log-format line."""

    client_addr: str
    remote_user: str | None  # None when logged as "-"
    timestamp: datetime  # timezone-aware, keeps the offset written in the log
    method: str
    path: str
    protocol: str
    status: int
    body_bytes: int
    referer: str
    user_agent: str

    @property
    def day(self) -> date:
        """Calendar date of the request in its own recorded offset."""
        return self.timestamp.date()

    @property
    def request(self) -> str:
        return f"{self.method} {self.path} {self.protocol}"


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """Recoverable per-line parse outcome (reason code + original line)."""

    reason: FailureReason
    raw_line: str


@dataclass(frozen=True, slots=True)
class LogSource:
    """A readable byte stream produced by the source locator."""

    name: str
    stream: BinaryIO
    compressed: bool = False
