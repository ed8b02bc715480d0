# =============================================================================
# Configuration Models Module
# =============================================================================
# Pydantic Settings model for the upload pipeline:
# - GeoUploadSettings: backend API, HTTP timeout, service store, CRS, logging
# =============================================================================

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .spatial import validate_crs

__all__ = ["GeoUploadSettings", "get_settings"]


class GeoUploadSettings(BaseSettings):
    """
    Configuration for the upload pipeline.

    Maps environment variables with prefix "GEOUPLOAD_":
    - GEOUPLOAD_API_BASE_URL → api_base_url
    - GEOUPLOAD_REQUEST_TIMEOUT → request_timeout
    - GEOUPLOAD_SERVICES_STORE_PATH → services_store_path
    - GEOUPLOAD_DEFAULT_SOURCE_CRS → default_source_crs
    - GEOUPLOAD_LOG_LEVEL → log_level

    Attributes:
        api_base_url: Dashboard backend base URL
        request_timeout: Timeout in seconds for backend and remote GeoJSON requests
        services_store_path: JSON file holding connected services
        default_source_crs: CRS applied to tabular uploads (None = already WGS84)
        log_level: Logging level name
    """

    api_base_url: str = Field(
        "https://ardhi-webgis-backend.onrender.com/api/",
        description="Dashboard backend base URL",
    )
    request_timeout: float = Field(30.0, gt=0, description="HTTP timeout in seconds")
    services_store_path: str = Field(
        "services.json", description="JSON file holding connected services"
    )
    default_source_crs: Optional[str] = Field(
        None, description="CRS of uploaded tabular coordinates"
    )
    log_level: str = Field("INFO", description="Logging level name")

    model_config = SettingsConfigDict(
        env_prefix="GEOUPLOAD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
    )

    @field_validator("default_source_crs")
    @classmethod
    def validate_source_crs(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return validate_crs(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> GeoUploadSettings:
    """Get cached settings instance."""
    return GeoUploadSettings()
