"""
Report Errors

Every error a report can raise derives from ReportError, so the runner can
isolate one failing report from the rest.
"""

from typing import Any, List, Optional


class ReportError(Exception):
    """Base class for report failures"""


class TypeConversionError(ReportError):
    """Text values that should be numeric or temporal failed to convert"""

    def __init__(self, column: str, target: str, bad_values: List[Any], bad_count: Optional[int] = None):
        self.column = column
        self.target = target
        self.bad_values = bad_values
        self.bad_count = bad_count if bad_count is not None else len(bad_values)
        super().__init__(
            f"Column '{column}' has {self.bad_count} values that do not convert to "
            f"{target}, e.g. {bad_values[:5]}"
        )


class UndefinedStatisticError(ReportError):
    """A statistic has no defined value for the given input"""
