"""
Test Suite Configuration
"""
from datetime import datetime
from pathlib import Path

import pytest
import polars as pl

from product_analytics.config import Settings
from product_analytics.data.tables import ProductTables


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(APP_ENV="testing")


@pytest.fixture
def sample_info_df() -> pl.DataFrame:
    """Product info; P7 has no finance row"""
    return pl.DataFrame({
        "product_name": ["Runner", "Tee", "Mystery", "Boot", "Socks", "Hoodie", "Orphan"],
        "product_id": ["P1", "P2", "P3", "P4", "P5", "P6", "P7"],
        "description": [
            "Men's Running Shoe",
            "Cotton T-Shirt",
            None,
            "Football boots for turf",
            "Trainer socks pack",
            "Women's Hoodie",
            "Orphan description",
        ],
    })


@pytest.fixture
def sample_finance_df() -> pl.DataFrame:
    """Finance data; P8 has no info row"""
    return pl.DataFrame({
        "product_id": ["P1", "P2", "P3", "P4", "P5", "P6", "P8"],
        "listing_price": [40.0, 42.0, 75.5, 129.0, 0.0, 74.9, 20.0],
        "sale_price": [36.0, 33.6, 52.85, 77.4, 0.0, 37.45, 20.0],
        "discount": [0.1, 0.2, 0.3, 0.4, 0.0, 0.5, 0.0],
        "revenue": [100.0, 200.0, 300.0, 400.0, 50.0, 600.0, 10.0],
    })


@pytest.fixture
def sample_reviews_df() -> pl.DataFrame:
    """Reviews with ratings stored as text"""
    return pl.DataFrame({
        "product_id": ["P1", "P2", "P3", "P4", "P5", "P6"],
        "rating": ["4.5", "3.0", "2.0", "5.0", "4.0", "3.5"],
        "reviews": [10.0, 20.0, 30.0, 40.0, 5.0, 60.0],
    })


@pytest.fixture
def sample_traffic_df() -> pl.DataFrame:
    """Traffic data; P3 never visited, P6 missing"""
    return pl.DataFrame({
        "product_id": ["P1", "P2", "P3", "P4", "P5"],
        "last_visited": [
            datetime(2018, 1, 15, 10, 0, 0),
            datetime(2018, 2, 3, 8, 30, 0),
            None,
            datetime(2018, 1, 20, 17, 45, 0),
            datetime(2018, 3, 1, 12, 0, 0),
        ],
    })


@pytest.fixture
def sample_brand_df() -> pl.DataFrame:
    """Brands; P5 has no brand"""
    return pl.DataFrame({
        "product_id": ["P1", "P2", "P3", "P4", "P5", "P6", "P8"],
        "brand": ["Adidas", "Adidas", "Nike", "Nike", None, "Adidas", "Nike"],
    })


@pytest.fixture
def sample_tables(
    sample_info_df,
    sample_finance_df,
    sample_reviews_df,
    sample_traffic_df,
    sample_brand_df,
) -> ProductTables:
    """Create the full sample table set"""
    return ProductTables(
        info=sample_info_df,
        finance=sample_finance_df,
        reviews=sample_reviews_df,
        traffic=sample_traffic_df,
        brand=sample_brand_df,
    )


@pytest.fixture
def sample_data_dir(tmp_path: Path, sample_tables: ProductTables) -> Path:
    """Write the sample tables as CSV files under the default file names"""
    data_dir = tmp_path / "raw"
    data_dir.mkdir()

    sample_tables.info.write_csv(data_dir / "info.csv")
    sample_tables.finance.write_csv(data_dir / "finance.csv")
    sample_tables.reviews.write_csv(data_dir / "reviews.csv")
    sample_tables.traffic.with_columns(
        pl.col("last_visited").dt.strftime("%Y-%m-%d %H:%M:%S")
    ).write_csv(data_dir / "traffic.csv")
    sample_tables.brand.write_csv(data_dir / "brands.csv")

    return data_dir
