"""
Product Reports Module
"""
from .analyses import (
    REPORTS,
    ReportName,
    average_discount_by_brand,
    description_length_rating,
    footwear_clothing_revenue,
    missing_values,
    monthly_reviews_by_brand,
    price_distribution,
    review_revenue_correlation,
    revenue_by_price_category,
)
from .errors import ReportError, TypeConversionError, UndefinedStatisticError
from .runner import ReportResult, ReportRunner, ReportStatus, run_reports

__all__ = [
    "REPORTS",
    "ReportName",
    "average_discount_by_brand",
    "description_length_rating",
    "footwear_clothing_revenue",
    "missing_values",
    "monthly_reviews_by_brand",
    "price_distribution",
    "review_revenue_correlation",
    "revenue_by_price_category",
    "ReportError",
    "TypeConversionError",
    "UndefinedStatisticError",
    "ReportResult",
    "ReportRunner",
    "ReportStatus",
    "run_reports",
]
