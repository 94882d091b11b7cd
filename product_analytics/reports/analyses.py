"""
Product Reports

One pure function per report. Each takes the five product tables, joins
what it needs on product_id (inner joins, so unmatched rows drop out) and
returns an ordered result table. Nothing here mutates its input.
"""

from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

import polars as pl
import structlog

from product_analytics.data.tables import PRODUCT_ID, ProductTables
from .errors import TypeConversionError, UndefinedStatisticError
from .stats import discrete_median, pearson_correlation

logger = structlog.get_logger(__name__)


class ReportName(str, Enum):
    """Available reports, in run order"""
    MISSING_VALUES = "missing_values"
    PRICE_DISTRIBUTION = "price_distribution"
    REVENUE_BY_PRICE_CATEGORY = "revenue_by_price_category"
    AVERAGE_DISCOUNT_BY_BRAND = "average_discount_by_brand"
    REVIEW_REVENUE_CORRELATION = "review_revenue_correlation"
    DESCRIPTION_LENGTH_RATING = "description_length_rating"
    MONTHLY_REVIEWS_BY_BRAND = "monthly_reviews_by_brand"
    FOOTWEAR_CLOTHING_REVENUE = "footwear_clothing_revenue"


# Upper bounds are exclusive; anything at or above the last bound is Elite
PRICE_BANDS: List[Tuple[str, float]] = [
    ("Budget", 42),
    ("Average", 74),
    ("Expensive", 129),
]
TOP_PRICE_BAND = "Elite"

DESCRIPTION_BUCKET = 100

FOOTWEAR = "footwear"
CLOTHING = "clothing"


def _join(tables: List[pl.DataFrame]) -> pl.DataFrame:
    """Inner-join frames on product_id"""
    joined = tables[0]
    for other in tables[1:]:
        joined = joined.join(other, on=PRODUCT_ID, how="inner")
    return joined


def _to_float(df: pl.DataFrame, column: str) -> pl.DataFrame:
    """Convert a text column to Float64, failing on any non-numeric value"""
    if df.schema[column] != pl.Utf8:
        return df.with_columns(pl.col(column).cast(pl.Float64))

    converted = df.with_columns(
        pl.col(column).str.strip_chars().cast(pl.Float64, strict=False).alias("_converted")
    )
    bad = converted.filter(pl.col(column).is_not_null() & pl.col("_converted").is_null())
    if bad.height:
        raise TypeConversionError(column, "number", bad[column].head(5).to_list(), bad.height)

    return converted.with_columns(pl.col("_converted").alias(column)).drop("_converted")


def _to_datetime(df: pl.DataFrame, column: str) -> pl.DataFrame:
    """Parse a text column to Datetime, failing on any unparseable value"""
    if df.schema[column] != pl.Utf8:
        return df

    converted = df.with_columns(
        pl.col(column).str.to_datetime(strict=False).alias("_converted")
    )
    bad = converted.filter(pl.col(column).is_not_null() & pl.col("_converted").is_null())
    if bad.height:
        raise TypeConversionError(column, "datetime", bad[column].head(5).to_list(), bad.height)

    return converted.with_columns(pl.col("_converted").alias(column)).drop("_converted")


def price_category_expr(column: str = "listing_price") -> pl.Expr:
    """Expression mapping a price to its half-open price band"""
    bands = iter(PRICE_BANDS)
    label, upper = next(bands)
    expr = pl.when(pl.col(column) < upper).then(pl.lit(label))
    for label, upper in bands:
        expr = expr.when(pl.col(column) < upper).then(pl.lit(label))
    return expr.otherwise(pl.lit(TOP_PRICE_BAND))


def missing_values(tables: ProductTables) -> pl.DataFrame:
    """
    Completeness of the joined info, finance and traffic data.

    Counts are taken after the join, so they describe missing data among
    products present in all three tables.
    """
    joined = _join([tables.info, tables.finance, tables.traffic])
    return joined.select(
        pl.len().cast(pl.Int64).alias("total_rows"),
        pl.col("description").count().cast(pl.Int64).alias("count_description"),
        pl.col("listing_price").count().cast(pl.Int64).alias("count_listing_price"),
        pl.col("last_visited").count().cast(pl.Int64).alias("count_last_visited"),
    )


def price_distribution(tables: ProductTables) -> pl.DataFrame:
    """Product count per brand and whole listing price, highest price first."""
    return (
        _join([tables.finance, tables.brand])
        .filter(pl.col("listing_price") > 0)
        # floor == truncation here since prices are positive
        .with_columns(pl.col("listing_price").cast(pl.Float64).floor().cast(pl.Int64).alias("price"))
        .group_by(["brand", "price"])
        .agg(pl.len().cast(pl.Int64).alias("count"))
        .sort(["price", "brand"], descending=[True, False], nulls_last=True)
        .select(["brand", "price", "count"])
    )


def revenue_by_price_category(tables: ProductTables) -> pl.DataFrame:
    """
    Product count and total revenue per brand and price band.

    Bands are Budget [-inf, 42), Average [42, 74), Expensive [74, 129) and
    Elite [129, inf). Rows without a brand are left out; a missing listing
    price falls through every band and lands in Elite.
    Ordered by total revenue, highest first.
    """
    return (
        _join([tables.finance, tables.brand])
        .filter(pl.col("brand").is_not_null())
        .with_columns(price_category_expr().alias("price_category"))
        .group_by(["brand", "price_category"])
        .agg(
            pl.len().cast(pl.Int64).alias("count"),
            pl.col("revenue").sum().alias("total_revenue"),
        )
        .sort(
            ["total_revenue", "brand", "price_category"],
            descending=[True, False, False],
        )
        .select(["brand", "price_category", "count", "total_revenue"])
    )


def average_discount_by_brand(tables: ProductTables) -> pl.DataFrame:
    """Mean discount per brand as a percentage, lowest first."""
    return (
        _join([tables.brand, tables.finance])
        .filter(pl.col("brand").is_not_null())
        .group_by("brand")
        .agg((pl.col("discount").mean() * 100).alias("average_discount"))
        .sort(["average_discount", "brand"], nulls_last=True)
    )


def review_revenue_correlation(tables: ProductTables) -> pl.DataFrame:
    """
    Pearson correlation between review count and revenue.

    Pairs with a null on either side are skipped.

    Raises:
        UndefinedStatisticError: fewer than two pairs or a constant series
    """
    pairs = (
        _join([tables.reviews, tables.finance])
        .select(
            pl.col("reviews").cast(pl.Float64),
            pl.col("revenue").cast(pl.Float64),
        )
        .drop_nulls()
    )
    r = pearson_correlation(pairs["reviews"].to_numpy(), pairs["revenue"].to_numpy())
    return pl.DataFrame({"review_revenue_corr": [r]}, schema={"review_revenue_corr": pl.Float64})


def description_length_rating(tables: ProductTables) -> pl.DataFrame:
    """
    Average rating per description length, lengths floored to hundreds.

    Raises:
        TypeConversionError: a rating holds non-numeric text
    """
    joined = _join([tables.info, tables.reviews]).filter(pl.col("description").is_not_null())
    joined = _to_float(joined, "rating")

    return (
        joined
        .with_columns(
            (
                (pl.col("description").str.len_chars() // DESCRIPTION_BUCKET) * DESCRIPTION_BUCKET
            ).cast(pl.Int64).alias("description_length")
        )
        .group_by("description_length")
        .agg(pl.col("rating").mean().round(2).alias("average_rating"))
        .sort("description_length")
    )


def monthly_reviews_by_brand(tables: ProductTables) -> pl.DataFrame:
    """Number of reviewed products per brand and month of last visit."""
    joined = _join([tables.brand, tables.traffic, tables.reviews])
    joined = _to_datetime(joined, "last_visited")

    return (
        joined
        .with_columns(pl.col("last_visited").dt.month().cast(pl.Int64).alias("month"))
        .filter(pl.col("brand").is_not_null() & pl.col("month").is_not_null())
        .group_by(["brand", "month"])
        .agg(pl.col(PRODUCT_ID).count().cast(pl.Int64).alias("num_reviews"))
        .sort(["brand", "month"])
    )


def footwear_filter() -> pl.Expr:
    """
    Footwear keyword match on description, case-insensitive.

    The non-null guard binds to the "foot" term only, as in
    ``shoe OR trainer OR (foot AND description IS NOT NULL)``.
    """
    description = pl.col("description").str.to_lowercase()
    return (
        description.str.contains("shoe", literal=True)
        | description.str.contains("trainer", literal=True)
        | (description.str.contains("foot", literal=True) & pl.col("description").is_not_null())
    )


def _revenue_summary(product_type: str, df: pl.DataFrame) -> Dict[str, object]:
    median: Optional[float]
    try:
        median = float(discrete_median(df["revenue"].drop_nulls().to_list()))
    except UndefinedStatisticError as e:
        logger.warning("Median revenue undefined", product_type=product_type, reason=str(e))
        median = None

    return {
        "product_type": product_type,
        "num_products": df.height,
        "median_revenue": median,
    }


def footwear_clothing_revenue(tables: ProductTables) -> pl.DataFrame:
    """
    Product count and median revenue for footwear against clothing.

    Clothing is every product whose description is not among the footwear
    descriptions. Matching is on the exact description string, so a
    description shared with a footwear product is excluded from clothing
    even when that row does not match a footwear keyword. Products without
    a description are in neither subset.
    """
    joined = _join([tables.info, tables.finance])

    footwear = joined.filter(footwear_filter())
    footwear_descriptions = footwear["description"].unique()

    clothing = joined.filter(
        pl.col("description").is_not_null()
        & ~pl.col("description").is_in(footwear_descriptions.implode())
    )

    rows = [_revenue_summary(FOOTWEAR, footwear), _revenue_summary(CLOTHING, clothing)]
    return pl.DataFrame(
        {
            "product_type": [row["product_type"] for row in rows],
            "num_products": [row["num_products"] for row in rows],
            "median_revenue": [row["median_revenue"] for row in rows],
        },
        schema={
            "product_type": pl.Utf8,
            "num_products": pl.Int64,
            "median_revenue": pl.Float64,
        },
    )


REPORTS: Dict[ReportName, Callable[[ProductTables], pl.DataFrame]] = {
    ReportName.MISSING_VALUES: missing_values,
    ReportName.PRICE_DISTRIBUTION: price_distribution,
    ReportName.REVENUE_BY_PRICE_CATEGORY: revenue_by_price_category,
    ReportName.AVERAGE_DISCOUNT_BY_BRAND: average_discount_by_brand,
    ReportName.REVIEW_REVENUE_CORRELATION: review_revenue_correlation,
    ReportName.DESCRIPTION_LENGTH_RATING: description_length_rating,
    ReportName.MONTHLY_REVIEWS_BY_BRAND: monthly_reviews_by_brand,
    ReportName.FOOTWEAR_CLOTHING_REVENUE: footwear_clothing_revenue,
}
