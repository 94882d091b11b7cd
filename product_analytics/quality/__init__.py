"""
Data Quality Module
"""
from .validators import (
    DataValidator,
    ValidationResult,
    ValidationStatus,
    create_table_validator,
    validate_tables,
)

__all__ = [
    "DataValidator",
    "ValidationResult",
    "ValidationStatus",
    "create_table_validator",
    "validate_tables",
]
