from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from nginx_log_insight.core.errors import SourceNotFoundError
from nginx_log_insight.core.filters import FilterCriteria, filter_records
from nginx_log_insight.core.ingest import ingest, ingest_report
from nginx_log_insight.core.models import AccessRecord, FailureReason, ParseFailure
from nginx_log_insight.core.parser import parse_line
from nginx_log_insight.core.trends import aggregate_by_day


def test_ingest_three_lines_trend_and_status_filter(
    tmp_path: Path, write_log, three_lines: list[str]
) -> None:
    path = write_log(tmp_path / "access.log", three_lines)

    records = ingest(path)

    assert aggregate_by_day(records) == {"2024-01-01": 2, "2024-01-02": 1}

    not_found = filter_records(records, FilterCriteria(status=404))
    assert len(not_found) == 1
    assert not_found[0].day == date(2024, 1, 2)
    assert not_found[0].path == "/missing"


def test_ingest_preserves_line_order(tmp_path: Path, write_log, three_lines: list[str]) -> None:
    path = write_log(tmp_path / "access.log", three_lines)
    records = ingest(path)
    assert records == [parse_line(line) for line in three_lines]


def test_ingest_skips_bad_lines(tmp_path: Path, write_log, three_lines: list[str]) -> None:
    lines = [
        three_lines[0],
        "garbage",
        three_lines[1].replace('" 200 ', '" abc '),
        three_lines[2].replace("[02/Jan/2024:08:15:00 +0000]", "[02/Jan/2024]"),
        three_lines[2],
    ]
    path = write_log(tmp_path / "access.log", lines)

    report = ingest_report(path)

    assert [r.path for r in report.records] == ["/index.html", "/missing"]
    assert report.stats.sources_read == 1
    assert report.stats.lines_read == 5
    assert report.stats.lines_skipped == 3
    assert report.stats.failure_counts == {
        FailureReason.MALFORMED_STRUCTURE: 1,
        FailureReason.INVALID_STATUS: 1,
        FailureReason.INVALID_TIMESTAMP: 1,
    }


def test_ingest_tree_with_corrupted_and_compressed_files(
    tmp_path: Path, write_log, write_gzip_log, write_bytes, three_lines: list[str]
) -> None:
    root = tmp_path / "logs"
    write_log(root / "valid.log", three_lines[:2])
    write_bytes(root / "corrupted.log", b"\x00\x01 not a log line\n{\"json\": true}\n")
    write_gzip_log(root / "archive" / "access.log.1.gz", three_lines[2:])

    records = ingest(root)

    expected = [parse_line(line) for line in three_lines[2:] + three_lines[:2]]
    assert records == expected


def test_ingest_skips_corrupt_gzip_entry(
    tmp_path: Path, write_log, write_bytes, three_lines: list[str]
) -> None:
    write_bytes(tmp_path / "a.log.gz", b"not gzip at all")
    write_log(tmp_path / "b.log", three_lines)

    report = ingest_report(tmp_path)

    assert len(report.records) == 3
    assert report.stats.sources_read == 1
    assert report.stats.skipped_entries == [str(tmp_path / "a.log.gz")]


def test_ingest_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(SourceNotFoundError):
        ingest(tmp_path / "nope")


def test_ingest_crlf_and_no_trailing_newline(
    tmp_path: Path, write_bytes, three_lines: list[str]
) -> None:
    data = ("\r\n".join(three_lines)).encode("utf-8")
    path = write_bytes(tmp_path / "access.log", data)

    records = ingest(path)

    assert len(records) == 3
    assert records[-1].user_agent == "Mozilla/5.0 (X11; Linux x86_64)"


def test_ingest_replaces_undecodable_bytes(tmp_path: Path, write_bytes) -> None:
    line = b'1.2.3.4 - - [01/Jan/2024:10:00:00 +0000] "GET / HTTP/1.1" 200 1 "-" "bot\xff"\n'
    path = write_bytes(tmp_path / "access.log", line)

    records = ingest(path)

    assert len(records) == 1
    assert records[0].user_agent == "bot\ufffd"


def test_ingest_strict_decoding_skips_entry(
    tmp_path: Path, write_bytes, write_log, three_lines: list[str]
) -> None:
    write_bytes(tmp_path / "a.log", b"\xff\xfe\xfd\n")
    write_log(tmp_path / "b.log", three_lines)

    report = ingest_report(tmp_path, decode_errors="strict")

    assert len(report.records) == 3
    assert report.stats.skipped_entries == [str(tmp_path / "a.log")]


def test_ingest_accepts_custom_parser(tmp_path: Path, write_log, three_lines: list[str]) -> None:
    path = write_log(tmp_path / "access.log", three_lines)

    class OnlyErrors:
        def parse(self, line: str) -> AccessRecord | ParseFailure:
            result = parse_line(line)
            if isinstance(result, AccessRecord) and result.status < 400:
                return ParseFailure(reason=FailureReason.MALFORMED_STRUCTURE, raw_line=line)
            return result

    records = ingest(path, parser=OnlyErrors())

    assert [r.status for r in records] == [404]


def test_ingest_parser_error_propagates(tmp_path: Path, write_log, three_lines: list[str]) -> None:
    path = write_log(tmp_path / "access.log", three_lines)

    class Exploding:
        def parse(self, line: str) -> AccessRecord | ParseFailure:
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        ingest(path, parser=Exploding())


def test_ingest_keeps_bare_carriage_return_inside_line(tmp_path: Path, write_bytes) -> None:
    data = (
        b'1.2.3.4 - - [01/Jan/2024:10:00:00 +0000] "GET / HTTP/1.1" 200 1 "-" "bad\rbot"\n'
        b'1.2.3.4 - - [01/Jan/2024:10:00:01 +0000] "GET /x HTTP/1.1" 200 1 "-" "ua"\r\n'
    )
    path = write_bytes(tmp_path / "access.log", data)

    report = ingest_report(path)

    assert [r.user_agent for r in report.records] == ["bad\rbot", "ua"]
    assert report.stats.lines_read == 2
    assert report.stats.lines_skipped == 0
