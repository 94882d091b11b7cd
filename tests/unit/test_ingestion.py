"""
Unit Tests - CSV Loader
"""
from datetime import datetime

import pytest
import polars as pl

from product_analytics.data.tables import TableName
from product_analytics.ingestion import TableFileConfig, TableLoader, TableLoadError, load_tables
from product_analytics.ingestion.csv_loader import LoadStatus
from product_analytics.reports import ReportRunner, ReportStatus


class TestTableLoader:
    """Tests for TableLoader"""

    def test_load_tables(self, sample_data_dir):
        loader = TableLoader()
        tables = loader.load_tables(sample_data_dir)

        assert tables.row_counts == {
            "info": 7,
            "finance": 7,
            "reviews": 6,
            "traffic": 5,
            "brand": 7,
        }
        assert len(loader.results) == 5
        assert all(r.status == LoadStatus.COMPLETED for r in loader.results)
        assert all(r.file_hash for r in loader.results)

    def test_column_types(self, sample_data_dir):
        tables = TableLoader().load_tables(sample_data_dir)

        assert tables.finance.schema["listing_price"] == pl.Float64
        assert tables.reviews.schema["reviews"] == pl.Float64
        # ratings stay as text until a report converts them
        assert tables.reviews.schema["rating"] == pl.Utf8
        assert tables.traffic["last_visited"][0] == datetime(2018, 1, 15, 10, 0, 0)

    def test_empty_fields_are_null(self, sample_data_dir):
        tables = TableLoader().load_tables(sample_data_dir)

        assert tables.info["description"].null_count() == 1
        assert tables.traffic["last_visited"].null_count() == 1
        assert tables.brand["brand"].null_count() == 1

    def test_loaded_tables_run_reports(self, sample_data_dir):
        tables = TableLoader().load_tables(sample_data_dir)
        results = ReportRunner().run(tables)

        assert all(r.status == ReportStatus.COMPLETED for r in results.values())

    def test_missing_file(self, sample_data_dir):
        (sample_data_dir / "brands.csv").unlink()
        loader = TableLoader()

        with pytest.raises(TableLoadError) as exc_info:
            loader.load_tables(sample_data_dir)

        assert exc_info.value.table == TableName.BRAND
        assert loader.results[-1].status == LoadStatus.FAILED

    def test_missing_column(self, tmp_path):
        path = tmp_path / "finance.csv"
        path.write_text("product_id,listing_price\nP1,10.0\n")

        with pytest.raises(TableLoadError, match="missing columns"):
            TableLoader().load_table(TableFileConfig(table=TableName.FINANCE, file_path=path))

    def test_non_numeric_value(self, tmp_path):
        path = tmp_path / "finance.csv"
        path.write_text(
            "product_id,listing_price,sale_price,discount,revenue\n"
            "P1,ten,9.0,0.1,90.0\n"
        )

        with pytest.raises(TableLoadError, match="type conversion failed"):
            TableLoader().load_table(TableFileConfig(table=TableName.FINANCE, file_path=path))

    def test_bad_timestamp(self, tmp_path):
        path = tmp_path / "traffic.csv"
        path.write_text("product_id,last_visited\nP1,yesterday\n")

        with pytest.raises(TableLoadError):
            TableLoader().load_table(TableFileConfig(table=TableName.TRAFFIC, file_path=path))

    def test_custom_delimiter(self, tmp_path):
        path = tmp_path / "brand.csv"
        path.write_text("product_id;brand\nP1;Nike\nP2;\n")

        df = TableLoader().load_table(
            TableFileConfig(table=TableName.BRAND, file_path=path, delimiter=";")
        )

        assert df["brand"].to_list() == ["Nike", None]


def test_load_tables_helper(sample_data_dir):
    tables = load_tables(sample_data_dir)
    assert tables.row_counts["finance"] == 7
