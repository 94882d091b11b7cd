"""
CSV Table Loader

Reads the five product tables from delimited text files with a header row.
Supports:
- Strict casting to the declared column types
- Timestamp parsing for traffic data
- Per-table load results for audit logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union
import hashlib

import polars as pl
import structlog
from pydantic import BaseModel

from product_analytics.config import get_settings
from product_analytics.data.tables import TABLE_SCHEMAS, ProductTables, TableName

logger = structlog.get_logger(__name__)

TIMESTAMP_COLUMNS: Dict[TableName, List[str]] = {
    TableName.TRAFFIC: ["last_visited"],
}


class TableLoadError(Exception):
    """Raised when a table file cannot be read or typed"""

    def __init__(self, table: TableName, message: str):
        self.table = table
        super().__init__(f"{table.value}: {message}")


class LoadStatus(str, Enum):
    """Table load status"""
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class TableFileConfig:
    """Configuration for loading one table file"""
    table: TableName
    file_path: Union[str, Path]
    delimiter: str = ","
    encoding: str = "utf8"
    null_values: List[str] = field(default_factory=lambda: ["", "NULL", "null", "None", "NA", "N/A"])
    datetime_format: str = "%Y-%m-%d %H:%M:%S"


class LoadResult(BaseModel):
    """Result of a table load"""
    table: str
    file_path: str
    status: LoadStatus
    rows_loaded: int = 0
    error_message: Optional[str] = None
    load_duration_seconds: float = 0
    started_at: datetime
    completed_at: Optional[datetime] = None
    file_hash: Optional[str] = None


class TableLoader:
    """
    Loads product tables from CSV files.

    Every column is read as text first and then cast strictly to the
    declared dtype, so malformed values fail the load instead of turning
    into nulls. ``rating`` is kept as text for the reports to convert.

    Example:
        loader = TableLoader()
        tables = loader.load_tables("data/raw")
    """

    def __init__(
        self,
        file_names: Optional[Dict[TableName, str]] = None,
        delimiter: Optional[str] = None,
        encoding: Optional[str] = None,
        null_values: Optional[List[str]] = None,
    ):
        data_settings = get_settings().data
        self.file_names = file_names or {
            TableName.INFO: data_settings.info_file,
            TableName.FINANCE: data_settings.finance_file,
            TableName.REVIEWS: data_settings.reviews_file,
            TableName.TRAFFIC: data_settings.traffic_file,
            TableName.BRAND: data_settings.brand_file,
        }
        self.delimiter = delimiter or data_settings.delimiter
        self.encoding = encoding or data_settings.encoding
        self.null_values = null_values if null_values is not None else data_settings.null_values
        self.results: List[LoadResult] = []

    def _compute_file_hash(self, file_path: Path) -> str:
        """Compute MD5 hash of file for the audit trail"""
        hash_md5 = hashlib.md5()
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(4096), b""):
                hash_md5.update(chunk)
        return hash_md5.hexdigest()

    def _read_csv(self, config: TableFileConfig) -> pl.DataFrame:
        """Read every column as text"""
        return pl.read_csv(
            config.file_path,
            separator=config.delimiter,
            encoding=config.encoding,
            null_values=config.null_values,
            infer_schema_length=0,
        )

    def _cast_columns(self, df: pl.DataFrame, config: TableFileConfig) -> pl.DataFrame:
        """Check required columns and cast them to their declared types"""
        schema = TABLE_SCHEMAS[config.table]

        missing = [column for column in schema if column not in df.columns]
        if missing:
            raise TableLoadError(config.table, f"missing columns {missing}")

        timestamp_columns = TIMESTAMP_COLUMNS.get(config.table, [])
        try:
            df = df.with_columns([
                pl.col(column).cast(dtype, strict=True)
                for column, dtype in schema.items()
                if column not in timestamp_columns
            ])
            for column in timestamp_columns:
                df = df.with_columns(
                    pl.col(column).str.to_datetime(config.datetime_format, strict=True)
                )
        except pl.exceptions.PolarsError as e:
            raise TableLoadError(config.table, f"type conversion failed: {e}") from e

        return df

    def load_table(self, config: TableFileConfig) -> pl.DataFrame:
        """
        Load a single table file.

        Args:
            config: Table file configuration

        Returns:
            Typed DataFrame

        Raises:
            TableLoadError: The file is missing, lacks a column or holds
                values that do not convert to the declared type
        """
        file_path = Path(config.file_path)
        started_at = datetime.now(timezone.utc)

        result = LoadResult(
            table=config.table.value,
            file_path=str(file_path),
            status=LoadStatus.FAILED,
            started_at=started_at,
        )
        self.results.append(result)

        try:
            if not file_path.exists():
                raise TableLoadError(config.table, f"file not found: {file_path}")

            result.file_hash = self._compute_file_hash(file_path)
            df = self._cast_columns(self._read_csv(config), config)

        except TableLoadError as e:
            result.error_message = str(e)
            result.completed_at = datetime.now(timezone.utc)
            logger.error("Table load failed", table=config.table.value, error=str(e))
            raise
        except pl.exceptions.PolarsError as e:
            result.error_message = str(e)
            result.completed_at = datetime.now(timezone.utc)
            logger.error("Table load failed", table=config.table.value, error=str(e))
            raise TableLoadError(config.table, str(e)) from e

        result.status = LoadStatus.COMPLETED
        result.rows_loaded = df.height
        result.completed_at = datetime.now(timezone.utc)
        result.load_duration_seconds = (result.completed_at - started_at).total_seconds()

        logger.info(
            "Table loaded",
            table=config.table.value,
            rows=df.height,
            duration_seconds=result.load_duration_seconds,
        )

        return df

    def load_tables(self, data_dir: Union[str, Path]) -> ProductTables:
        """
        Load all five tables from a directory.

        Args:
            data_dir: Directory containing the table files

        Returns:
            ProductTables holding every typed table
        """
        data_dir = Path(data_dir)
        self.results = []

        frames = {}
        for table in TableName:
            config = TableFileConfig(
                table=table,
                file_path=data_dir / self.file_names[table],
                delimiter=self.delimiter,
                encoding=self.encoding,
                null_values=self.null_values,
            )
            frames[table.value] = self.load_table(config)

        logger.info(
            "All tables loaded",
            data_dir=str(data_dir),
            rows={name: df.height for name, df in frames.items()},
        )

        return ProductTables(**frames)


def load_tables(data_dir: Optional[Union[str, Path]] = None) -> ProductTables:
    """Load the five product tables using configured file names"""
    return TableLoader().load_tables(data_dir or get_settings().data.data_dir)
