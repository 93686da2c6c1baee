from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Support portal configuration read from environment variables."""

    app_name: str = Field(default="Support Portal")
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(levelname)s %(name)s %(message)s")

    # Client-local storage
    storage_backend: Literal["file", "memory"] = Field(default="file")
    storage_path: str = Field(default=".support-portal")
    storage_namespace: str = Field(default="supportPortal")
    storage_quota_bytes: int | None = Field(default=None)

    # Analytics and recommendations
    analytics_max_events: int = Field(default=1500)
    summary_top_n: int = Field(default=8)
    summary_priority_top_n: int = Field(default=4)
    recommendation_limit: int = Field(default=3, ge=1, le=3)

    # Observability configuration
    otel_enabled: bool = Field(default=False)
    otel_service_name: str = Field(default="support-portal")
    otel_exporter_otlp_endpoint: str | None = Field(default=None)
    otel_exporter_otlp_headers: str | None = Field(default=None)

    class Config:
        env_prefix = "SUPPORT_PORTAL_"
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the portal settings."""

    return Settings()
