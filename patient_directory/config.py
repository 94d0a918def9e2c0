"""
Configuration settings for the Patient Directory.

Uses Pydantic Settings to load environment variables for the patient data
source, query defaults, logging, and the HTTP transport.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Data source
    data_file: Path = Field(Path("data/data.json"), alias="PATIENTS_DATA_FILE")

    # Query defaults
    query_default_limit: int = Field(10, alias="QUERY_DEFAULT_LIMIT", ge=1)
    query_max_limit: int = Field(100, alias="QUERY_MAX_LIMIT", ge=1)

    # HTTP transport
    api_host: str = Field("127.0.0.1", alias="API_HOST")
    api_port: int = Field(8000, alias="API_PORT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
