"""
Prefect Workflow Orchestration - Product Reports

Scheduled report run:
- Load the product tables
- Validate input quality
- Run the report suite
- Export report tables
"""

from typing import Dict, List, Optional

from prefect import flow, task, get_run_logger
from prefect.cache_policies import NO_CACHE

from product_analytics.config import get_settings
from product_analytics.data.tables import ProductTables
from product_analytics.ingestion import load_tables
from product_analytics.quality import ValidationStatus, validate_tables
from product_analytics.reports import ReportName, ReportResult, ReportRunner, ReportStatus

settings = get_settings()


# =============================================================================
# TASKS
# =============================================================================

@task(
    name="load_product_tables",
    description="Load the five product tables from CSV",
    cache_policy=NO_CACHE,
    retries=2,
    retry_delay_seconds=30,
)
def load_product_tables(data_dir: str) -> ProductTables:
    """Load product tables"""
    logger = get_run_logger()

    tables = load_tables(data_dir)
    logger.info(f"Loaded tables: {tables.row_counts}")

    return tables


@task(
    name="validate_product_tables",
    description="Run input quality checks",
    cache_policy=NO_CACHE,
)
def validate_product_tables(tables: ProductTables) -> dict:
    """Validate input tables"""
    logger = get_run_logger()

    results = validate_tables(tables)
    summary = {
        name.value: {
            "status": result.status.value,
            "passed_checks": result.passed_checks,
            "total_checks": result.total_checks,
        }
        for name, result in results.items()
    }

    not_passed = [name for name, s in summary.items() if s["status"] != ValidationStatus.PASSED.value]
    if not_passed:
        logger.warning(f"Validation did not pass for: {not_passed}")

    return summary


@task(
    name="run_reports",
    description="Run the product report suite",
    cache_policy=NO_CACHE,
)
def run_reports(
    tables: ProductTables,
    report_names: Optional[List[str]] = None,
) -> Dict[ReportName, ReportResult]:
    """Run reports"""
    logger = get_run_logger()

    runner = ReportRunner(
        parallel=settings.reports.parallel,
        max_workers=settings.reports.max_workers,
    )
    names = [ReportName(name) for name in report_names] if report_names else None
    results = runner.run(tables, names)

    for name, result in results.items():
        if result.status == ReportStatus.FAILED:
            logger.error(f"Report {name.value} failed: {result.error}")

    return results


@task(
    name="export_reports",
    description="Write report tables to the output directory",
    cache_policy=NO_CACHE,
)
def export_reports(
    results: Dict[ReportName, ReportResult],
    output_dir: str,
    fmt: str,
) -> Dict[str, str]:
    """Export report tables"""
    logger = get_run_logger()

    written = ReportRunner().write_results(results, output_dir, fmt)
    logger.info(f"Exported {len(written)} reports to {output_dir}")

    return {name.value: str(path) for name, path in written.items()}


# =============================================================================
# FLOWS
# =============================================================================

@flow(
    name="product_reports",
    description="Load product tables and run the report suite",
)
def product_reports(
    data_dir: Optional[str] = None,
    output_dir: Optional[str] = None,
    report_names: Optional[List[str]] = None,
) -> dict:
    """
    Product report pipeline.

    Steps:
    1. Load tables
    2. Validate inputs
    3. Run reports
    4. Export results
    """
    logger = get_run_logger()

    data_dir = data_dir or settings.data.data_dir
    output_dir = output_dir or settings.data.output_dir

    logger.info(f"Starting product reports from {data_dir}")

    tables = load_product_tables(data_dir)
    validation = validate_product_tables(tables)
    results = run_reports(tables, report_names)
    exported = export_reports(results, output_dir, settings.reports.output_format)

    return {
        "validation": validation,
        "reports": {name.value: result.status.value for name, result in results.items()},
        "exported": exported,
        "status": "success" if all(r.succeeded for r in results.values()) else "partial",
    }


if __name__ == "__main__":
    product_reports()
