"""
Unit Tests - Configuration
"""
import pytest
from pydantic import ValidationError

from product_analytics.config import Settings
from product_analytics.config.settings import ReportSettings


class TestSettings:
    """Tests for Settings"""

    def test_defaults(self, test_settings):
        assert test_settings.app_env == "testing"
        assert test_settings.data.brand_file == "brands.csv"
        assert test_settings.reports.output_format == "csv"
        assert not test_settings.is_production

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(APP_ENV="qa")

    def test_output_format_normalised(self):
        assert ReportSettings(output_format="PARQUET").output_format == "parquet"

    def test_invalid_output_format(self):
        with pytest.raises(ValidationError):
            ReportSettings(output_format="xlsx")

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("REPORT_PARALLEL", "true")
        monkeypatch.setenv("REPORT_MAX_WORKERS", "8")
        monkeypatch.setenv("DATA_DATA_DIR", "/srv/products")

        settings = Settings()

        assert settings.reports.parallel is True
        assert settings.reports.max_workers == 8
        assert settings.data.data_dir == "/srv/products"
