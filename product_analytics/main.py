"""
Command Line Entry Point

Loads the product tables, validates them, runs the reports and prints or
exports the results.

Usage:
    product-reports --data-dir data/raw
    product-reports --report price_distribution --report missing_values
    product-reports --parallel --output-dir data/reports --format parquet
"""

import argparse
import sys
from typing import Dict, List, Optional

import polars as pl
import structlog

from product_analytics.config import get_settings
from product_analytics.config.logging import configure_logging
from product_analytics.ingestion import TableLoader, TableLoadError
from product_analytics.quality import ValidationStatus, validate_tables
from product_analytics.reports import ReportName, ReportResult, ReportRunner

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_REPORT_FAILED = 1
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="product-reports",
        description="Product analytics report suite",
    )
    parser.add_argument(
        "--data-dir",
        default=settings.data.data_dir,
        help=f"Directory holding the input CSV files (default: {settings.data.data_dir})",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Write report tables to this directory",
    )
    parser.add_argument(
        "--report",
        action="append",
        choices=[name.value for name in ReportName],
        help="Report to run; repeat for several (default: all)",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        default=settings.reports.parallel,
        help="Run reports on a thread pool",
    )
    parser.add_argument(
        "--format",
        choices=["csv", "parquet"],
        default=settings.reports.output_format,
        help="Export format (default: %(default)s)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop when input validation does not pass",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override LOG_LEVEL",
    )
    return parser


def print_results(results: Dict[ReportName, ReportResult]) -> None:
    """Print each report table to stdout"""
    with pl.Config(tbl_rows=-1, tbl_cols=-1):
        for name, result in results.items():
            print(f"\n== {name.value} [{result.status.value}]")
            if result.data is not None:
                print(result.data)
            else:
                print(result.error)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    configure_logging(args.log_level)

    try:
        tables = TableLoader().load_tables(args.data_dir)
    except TableLoadError as e:
        logger.error("Could not load tables", error=str(e))
        return EXIT_INPUT_ERROR

    validation = validate_tables(tables, strict_mode=args.strict)
    not_passed = [name.value for name, result in validation.items() if result.status != ValidationStatus.PASSED]
    if not_passed and args.strict:
        logger.error("Input validation did not pass", tables=not_passed)
        return EXIT_INPUT_ERROR

    runner = ReportRunner(parallel=args.parallel, max_workers=settings.reports.max_workers)
    names = [ReportName(name) for name in args.report] if args.report else None
    results = runner.run(tables, names)

    print_results(results)

    if args.output_dir:
        runner.write_results(results, args.output_dir, args.format)

    if not all(result.succeeded for result in results.values()):
        return EXIT_REPORT_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
