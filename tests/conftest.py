from __future__ import annotations

import gzip
from collections.abc import Callable
from pathlib import Path

import pytest

LINE_JAN1_INDEX = (
    '192.168.1.10 - - [01/Jan/2024:10:00:00 +0000] "GET /index.html HTTP/1.1" 200 512 '
    '"https://example.com/" "Mozilla/5.0 (X11; Linux x86_64)"'
)
LINE_JAN1_LOGIN = (
    '192.168.1.11 - - [01/Jan/2024:12:30:00 +0000] "POST /api/login HTTP/1.1" 200 - '
    '"-" "curl/8.4.0"'
)
LINE_JAN2_MISSING = (
    '10.0.0.5 - - [02/Jan/2024:08:15:00 +0000] "GET /missing HTTP/1.1" 404 153 '
    '"-" "Mozilla/5.0 (X11; Linux x86_64)"'
)

THREE_LINES = [LINE_JAN1_INDEX, LINE_JAN1_LOGIN, LINE_JAN2_MISSING]


@pytest.fixture
def three_lines() -> list[str]:
    return list(THREE_LINES)


@pytest.fixture
def write_log() -> Callable[[Path, list[str]], Path]:
    def _write(path: Path, lines: list[str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_gzip_log() -> Callable[[Path, list[str]], Path]:
    def _write(path: Path, lines: list[str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def write_bytes() -> Callable[[Path, bytes], Path]:
    def _write(path: Path, data: bytes) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _write
