"""
Product Table Models

Column layout of the five product tables and the immutable container the
reports read from. Every table is keyed by ``product_id``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Tuple

import polars as pl


class TableName(str, Enum):
    """Input tables"""
    INFO = "info"
    FINANCE = "finance"
    REVIEWS = "reviews"
    TRAFFIC = "traffic"
    BRAND = "brand"


PRODUCT_ID = "product_id"

# Read-time dtypes. rating stays text until the report that needs it
# converts it; last_visited is parsed separately by the loader.
TABLE_SCHEMAS: Dict[TableName, Dict[str, pl.DataType]] = {
    TableName.INFO: {
        "product_name": pl.Utf8,
        PRODUCT_ID: pl.Utf8,
        "description": pl.Utf8,
    },
    TableName.FINANCE: {
        PRODUCT_ID: pl.Utf8,
        "listing_price": pl.Float64,
        "sale_price": pl.Float64,
        "discount": pl.Float64,
        "revenue": pl.Float64,
    },
    TableName.REVIEWS: {
        PRODUCT_ID: pl.Utf8,
        "rating": pl.Utf8,
        "reviews": pl.Float64,
    },
    TableName.TRAFFIC: {
        PRODUCT_ID: pl.Utf8,
        "last_visited": pl.Utf8,
    },
    TableName.BRAND: {
        PRODUCT_ID: pl.Utf8,
        "brand": pl.Utf8,
    },
}


@dataclass(frozen=True)
class ProductTables:
    """
    The five input tables, loaded once and shared read-only by every report.

    Example:
        tables = ProductTables(info=info_df, finance=finance_df, ...)
        report = price_distribution(tables)
    """
    info: pl.DataFrame
    finance: pl.DataFrame
    reviews: pl.DataFrame
    traffic: pl.DataFrame
    brand: pl.DataFrame

    def get(self, name: TableName) -> pl.DataFrame:
        """Return a table by name"""
        return getattr(self, name.value)

    def items(self) -> Iterator[Tuple[TableName, pl.DataFrame]]:
        """Iterate (name, frame) pairs in declaration order"""
        for name in TableName:
            yield name, self.get(name)

    @property
    def row_counts(self) -> Dict[str, int]:
        """Row count per table"""
        return {name.value: df.height for name, df in self.items()}
