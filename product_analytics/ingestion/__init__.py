"""
Data Ingestion Module
"""
from .csv_loader import (
    LoadResult,
    TableFileConfig,
    TableLoader,
    TableLoadError,
    load_tables,
)

__all__ = [
    "LoadResult",
    "TableFileConfig",
    "TableLoader",
    "TableLoadError",
    "load_tables",
]
