"""
Report Runner

Runs the report suite over one set of product tables, isolating failures
so that one report's error never stops the others, and exports results.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import polars as pl
import structlog

from product_analytics.data.tables import ProductTables
from .analyses import REPORTS, ReportName
from .errors import UndefinedStatisticError

logger = structlog.get_logger(__name__)


class ReportStatus(str, Enum):
    """Outcome of a single report"""
    COMPLETED = "completed"
    UNDEFINED = "undefined"  # statistic has no value for this data
    FAILED = "failed"


@dataclass
class ReportResult:
    """Result of one report run"""
    name: ReportName
    status: ReportStatus
    started_at: datetime
    completed_at: datetime
    data: Optional[pl.DataFrame] = None
    error: Optional[str] = None
    columns: List[str] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def row_count(self) -> int:
        return self.data.height if self.data is not None else 0

    @property
    def succeeded(self) -> bool:
        """Completed, or ran cleanly to an undefined statistic"""
        return self.status != ReportStatus.FAILED


class ReportRunner:
    """
    Runs product reports with per-report failure isolation.

    Reports only read the shared tables, so they can run sequentially
    (the default) or on a thread pool.

    Example:
        runner = ReportRunner(parallel=True)
        results = runner.run(tables)
        runner.write_results(results, "data/reports")
    """

    def __init__(
        self,
        parallel: bool = False,
        max_workers: int = 4,
    ):
        self.parallel = parallel
        self.max_workers = max_workers

    def run_report(self, tables: ProductTables, name: ReportName) -> ReportResult:
        """
        Run a single report.

        Errors are caught and recorded on the result rather than raised.
        """
        report = REPORTS[name]
        started_at = datetime.now(timezone.utc)
        log = logger.bind(report=name.value)
        log.debug("Starting report")

        try:
            data = report(tables)
        except UndefinedStatisticError as e:
            completed_at = datetime.now(timezone.utc)
            log.warning("Report undefined", reason=str(e))
            return ReportResult(
                name=name,
                status=ReportStatus.UNDEFINED,
                started_at=started_at,
                completed_at=completed_at,
                error=str(e),
            )
        except Exception as e:
            completed_at = datetime.now(timezone.utc)
            log.error("Report failed", error=str(e), error_type=type(e).__name__)
            return ReportResult(
                name=name,
                status=ReportStatus.FAILED,
                started_at=started_at,
                completed_at=completed_at,
                error=f"{type(e).__name__}: {e}",
            )

        result = ReportResult(
            name=name,
            status=ReportStatus.COMPLETED,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            data=data,
            columns=data.columns,
        )
        log.info(
            "Report completed",
            rows=result.row_count,
            duration_seconds=result.duration_seconds,
        )
        return result

    def run(
        self,
        tables: ProductTables,
        names: Optional[Iterable[ReportName]] = None,
    ) -> Dict[ReportName, ReportResult]:
        """
        Run reports over the given tables.

        Args:
            tables: Loaded product tables
            names: Reports to run, all of them by default

        Returns:
            Results keyed by report name, in run order
        """
        wanted = set(REPORTS) if names is None else {ReportName(name) for name in names}
        selected = [name for name in REPORTS if name in wanted]

        logger.info(
            "Running reports",
            reports=[name.value for name in selected],
            parallel=self.parallel,
        )

        if self.parallel and len(selected) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {
                    name: executor.submit(self.run_report, tables, name)
                    for name in selected
                }
                results = {name: futures[name].result() for name in selected}
        else:
            results = {name: self.run_report(tables, name) for name in selected}

        completed = sum(1 for r in results.values() if r.status == ReportStatus.COMPLETED)
        undefined = sum(1 for r in results.values() if r.status == ReportStatus.UNDEFINED)
        failed = sum(1 for r in results.values() if r.status == ReportStatus.FAILED)

        logger.info(
            f"Report run complete: {completed} completed, {undefined} undefined, {failed} failed",
            total_duration_seconds=round(sum(r.duration_seconds for r in results.values()), 4),
        )

        return results

    def write_results(
        self,
        results: Dict[ReportName, ReportResult],
        output_dir: Union[str, Path],
        fmt: str = "csv",
    ) -> Dict[ReportName, Path]:
        """
        Write each completed report to ``<output_dir>/<report>.<fmt>``.

        Reports without data are skipped.

        Returns:
            Written file path per report
        """
        if fmt not in ("csv", "parquet"):
            raise ValueError(f"Unsupported output format: {fmt}")

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        written = {}
        for name, result in results.items():
            if result.data is None:
                logger.info("Skipping export", report=name.value, status=result.status.value)
                continue

            output_file = output_dir / f"{name.value}.{fmt}"
            if fmt == "parquet":
                result.data.write_parquet(output_file)
            else:
                result.data.write_csv(output_file)

            written[name] = output_file
            logger.info(f"Written {result.row_count} rows to {output_file}", report=name.value)

        return written


def run_reports(
    tables: ProductTables,
    names: Optional[Iterable[ReportName]] = None,
    parallel: bool = False,
) -> Dict[ReportName, ReportResult]:
    """Run reports with a default-configured runner"""
    return ReportRunner(parallel=parallel).run(tables, names)
