from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from nginx_log_insight.core.filters import filter_records
from nginx_log_insight.core.ingest import ingest_report
from nginx_log_insight.core.render import format_records, format_trend
from nginx_log_insight.core.trends import aggregate_by_day
from nginx_log_insight.log_config import configure_logging
from nginx_log_insight.tools.query import build_criteria


def build_argument_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="nginx-log-insight",
        description="Query and trend analysis over Nginx combined-format access logs.",
    )
    p.add_argument("path", help="Log file, .gz file or directory (walked recursively)")

    # Date window (explicit bounds)
    p.add_argument("--start-date", default=None, help="YYYY-MM-DD, inclusive")
    p.add_argument("--end-date", default=None, help="YYYY-MM-DD, inclusive")
    # Date window (selectors, override explicit bounds)
    p.add_argument("--date", default=None, help="YYYY-MM-DD (single day)")
    p.add_argument("--week", default=None, help="YYYY-Www (ISO week)")
    p.add_argument("--month", default=None, help="YYYY-MM")
    p.add_argument("--year", default=None, help="YYYY")

    p.add_argument("--status", type=int, default=None, help="Exact HTTP status code")
    p.add_argument("--referer", default=None, help="Referer to match")
    p.add_argument("--path", dest="request_path", default=None, help="Requested path to match")
    p.add_argument(
        "--contains",
        action="store_true",
        help="Match --referer/--path as substrings instead of exact values",
    )

    p.add_argument("--trend", action="store_true", help="Print requests per day instead of records")
    p.add_argument("--limit", type=int, default=None, help="Max records to list (default: no cap)")
    p.add_argument("--stats", action="store_true", help="Print ingestion statistics")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING (default), ERROR")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint: list matching records or print a daily trend table."""
    args = build_argument_parser().parse_args(argv)
    configure_logging(args.log_level, default="WARNING")

    try:
        if args.limit is not None and args.limit <= 0:
            raise ValueError("--limit must be > 0")
        criteria = build_criteria(
            start_date=args.start_date,
            end_date=args.end_date,
            date=args.date,
            week=args.week,
            month=args.month,
            year=args.year,
            status=args.status,
            referer=args.referer,
            path=args.request_path,
            match_mode="contains" if args.contains else "exact",
        )
        report = ingest_report(args.path)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    matched = filter_records(report.records, criteria)

    if args.trend:
        print(format_trend(aggregate_by_day(matched)))
    else:
        shown = matched if args.limit is None else matched[: args.limit]
        print(format_records(shown))
        print(f"\nFound {len(matched)} matching records.")

    if args.stats:
        stats = report.stats
        print(
            f"\nSources read: {stats.sources_read}, lines read: {stats.lines_read}, "
            f"lines skipped: {stats.lines_skipped}, entries skipped: {len(stats.skipped_entries)}"
        )
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
