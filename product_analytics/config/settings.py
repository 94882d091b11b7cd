"""
Product Analytics Reports
Centralized Configuration Management

Configuration is loaded with Pydantic settings from environment variables
and an optional .env file.
"""

from functools import lru_cache
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataSettings(BaseSettings):
    """Input CSV and output locations"""

    model_config = SettingsConfigDict(env_prefix="DATA_")

    data_dir: str = Field(default="./data/raw", description="Directory holding the input CSV files")
    output_dir: str = Field(default="./data/reports", description="Directory for exported report tables")

    # One file per table
    info_file: str = Field(default="info.csv", description="Product info file")
    finance_file: str = Field(default="finance.csv", description="Finance file")
    reviews_file: str = Field(default="reviews.csv", description="Reviews file")
    traffic_file: str = Field(default="traffic.csv", description="Traffic file")
    brand_file: str = Field(default="brands.csv", description="Brand file")

    delimiter: str = Field(default=",", description="CSV field delimiter")
    encoding: str = Field(default="utf8", description="CSV encoding")
    null_values: List[str] = Field(
        default=["", "NULL", "null", "None", "NA", "N/A"],
        description="Markers read as null",
    )


class ReportSettings(BaseSettings):
    """Report execution configuration"""

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    parallel: bool = Field(default=False, description="Evaluate reports on a thread pool")
    max_workers: int = Field(default=4, description="Thread pool size for parallel runs")
    output_format: str = Field(default="csv", description="Export format: csv or parquet")

    @field_validator("output_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate export format"""
        allowed = ["csv", "parquet"]
        if v.lower() not in allowed:
            raise ValueError(f"Output format must be one of: {allowed}")
        return v.lower()


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="text", alias="LOG_FORMAT", description="Log format: json or text")


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="product-analytics", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")

    # Version
    version: str = Field(default="1.0.0", description="Application version")

    # Subsystem configurations
    data: DataSettings = Field(default_factory=DataSettings)
    reports: ReportSettings = Field(default_factory=ReportSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.app_env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
