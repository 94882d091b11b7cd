"""
Data Validation Module

Rule-based quality checks on the input tables before reports run.

Features:
- Null checks
- Uniqueness checks
- Range/boundary checks
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import polars as pl
import structlog

from product_analytics.data.tables import PRODUCT_ID, ProductTables, TableName

logger = structlog.get_logger(__name__)


class ValidationSeverity(str, Enum):
    """Severity levels for validation failures"""
    ERROR = "error"  # Critical - blocks strict runs
    WARNING = "warning"  # Non-critical - logged but continues


class ValidationStatus(str, Enum):
    """Overall validation status"""
    PASSED = "passed"
    FAILED = "failed"
    PARTIAL = "partial"


@dataclass
class ValidationCheck:
    """Single validation check result"""
    name: str
    passed: bool
    severity: ValidationSeverity
    message: str
    details: Optional[Dict[str, Any]] = None
    failed_rows: int = 0
    total_rows: int = 0


@dataclass
class ValidationResult:
    """Complete validation suite result"""
    status: ValidationStatus
    total_checks: int
    passed_checks: int
    failed_checks: int
    warning_count: int
    checks: List[ValidationCheck] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None





class DataValidator:
    """
    Chainable column checks run against one input table.

    Each ``add_*`` method registers a check that counts offending rows; a
    check passes when that count is zero.

    Example:
        result = (
            DataValidator()
            .add_not_null_check("product_id")
            .add_range_check("discount", min_value=0, max_value=1)
            .validate(finance)
        )
    """

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode  # warnings count as failures
        self._checks: List[Callable[[pl.DataFrame], ValidationCheck]] = []

    def _add_column_check(
        self,
        name: str,
        column: str,
        severity: ValidationSeverity,
        count_failures: Callable[[pl.DataFrame], int],
        describe: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> "DataValidator":
        def check(df: pl.DataFrame) -> ValidationCheck:
            if column not in df.columns:
                return ValidationCheck(
                    name=name,
                    passed=False,
                    severity=severity,
                    message=f"Column '{column}' not found",
                )

            failures = count_failures(df)
            return ValidationCheck(
                name=name,
                passed=failures == 0,
                severity=severity,
                message=f"{column}: {failures} rows {describe}" if failures else f"{column}: ok",
                details={**(details or {}), "failed_rows": failures},
                failed_rows=failures,
                total_rows=df.height,
            )

        self._checks.append(check)
        return self

    def add_not_null_check(
        self,
        column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        return self._add_column_check(
            f"not_null_{column}",
            column,
            severity,
            lambda df: df[column].null_count(),
            "are null",
        )

    def add_unique_check(
        self,
        column: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Every row sharing a value with another row counts as a failure"""
        return self._add_column_check(
            f"unique_{column}",
            column,
            severity,
            lambda df: int(df[column].is_duplicated().sum()),
            "share a value",
        )

    def add_range_check(
        self,
        column: str,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
    ) -> "DataValidator":
        """Closed range check; either bound may be omitted and nulls are skipped"""
        def count_outside(df: pl.DataFrame) -> int:
            outside = pl.lit(False)
            if min_value is not None:
                outside = outside | (pl.col(column) < min_value)
            if max_value is not None:
                outside = outside | (pl.col(column) > max_value)
            return df.filter(outside).height

        return self._add_column_check(
            f"range_{column}",
            column,
            severity,
            count_outside,
            f"outside [{min_value}, {max_value}]",
            details={"min": min_value, "max": max_value},
        )

    def validate(self, df: pl.DataFrame) -> ValidationResult:
        """Run every registered check against ``df``"""
        started_at = datetime.now(timezone.utc)
        checks = [check(df) for check in self._checks]

        for check in checks:
            if not check.passed:
                logger.warning(
                    "Check failed",
                    check=check.name,
                    message=check.message,
                    severity=check.severity.value,
                )

        failed = [c for c in checks if not c.passed]
        errors = sum(1 for c in failed if c.severity == ValidationSeverity.ERROR)
        warnings = len(failed) - errors

        if errors or (warnings and self.strict_mode):
            status = ValidationStatus.FAILED
        elif warnings:
            status = ValidationStatus.PARTIAL
        else:
            status = ValidationStatus.PASSED

        return ValidationResult(
            status=status,
            total_checks=len(checks),
            passed_checks=len(checks) - len(failed),
            failed_checks=errors,
            warning_count=warnings,
            checks=checks,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
        )


def create_table_validator(table: TableName, strict_mode: bool = False) -> DataValidator:
    """Create the pre-configured validator for one input table"""
    validator = (
        DataValidator(strict_mode=strict_mode)
        .add_not_null_check(PRODUCT_ID)
        .add_unique_check(PRODUCT_ID)
    )

    if table == TableName.FINANCE:
        validator = (
            validator
            .add_range_check("listing_price", min_value=0, severity=ValidationSeverity.WARNING)
            .add_range_check("sale_price", min_value=0, severity=ValidationSeverity.WARNING)
            .add_range_check("discount", min_value=0, max_value=1, severity=ValidationSeverity.WARNING)
            .add_range_check("revenue", min_value=0, severity=ValidationSeverity.WARNING)
        )
    elif table == TableName.REVIEWS:
        validator = validator.add_range_check("reviews", min_value=0, severity=ValidationSeverity.WARNING)

    return validator


def validate_tables(tables: ProductTables, strict_mode: bool = False) -> Dict[TableName, ValidationResult]:
    """
    Validate every input table.

    Args:
        tables: Loaded product tables
        strict_mode: Treat warnings as failures

    Returns:
        Validation result per table
    """
    results = {}
    for name, df in tables.items():
        result = create_table_validator(name, strict_mode=strict_mode).validate(df)
        results[name] = result

        logger.info(
            f"Validation {result.status.value}",
            table=name.value,
            passed=result.passed_checks,
            failed=result.failed_checks,
            warnings=result.warning_count,
        )

    return results
