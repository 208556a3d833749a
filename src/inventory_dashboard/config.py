"""Application configuration objects."""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CHART_PALETTE = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884d8"]
VENDOR_PALETTE = ["#8884d8", "#82ca9d", "#ffc658", "#ff7c7c", "#00C49F", "#FFBB28"]

# Placeholder business rule used by the finance screen, not a measured value.
CONSUMPTION_RATIO = 0.85


class Settings(BaseSettings):
    """Pydantic settings used to configure the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="Inventory Dashboard Service",
        description="Human friendly name for the API.",
    )
    environment: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Deployment environment flag used for logging.",
    )
    backend_base_url: str = Field(
        default="http://localhost:9000/api",
        description="Base URL of the upstream inventory REST API.",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for upstream requests.",
    )
    consumption_ratio: float = Field(
        default=CONSUMPTION_RATIO,
        ge=0,
        le=1,
        description="Fraction of purchases reported as consumption.",
    )
    top_n: int = Field(default=5, ge=1, description="Slices kept in the consumption chart.")
    min_rows: int = Field(default=5, ge=1, description="Rows in the most-ordered chart.")
    chart_palette: list[str] = Field(default_factory=lambda: list(CHART_PALETTE))
    vendor_palette: list[str] = Field(default_factory=lambda: list(VENDOR_PALETTE))
    log_level: str = Field(default="INFO", description="Root log level for the service.")
    log_file: str | None = Field(
        default=None,
        description="Optional path of a rotating log file.",
    )

    @field_validator("backend_base_url")
    @classmethod
    def _validate_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("backend_base_url must be an http:// or https:// URL")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of :class:`Settings`."""

    return Settings()


__all__ = ["CHART_PALETTE", "CONSUMPTION_RATIO", "Settings", "VENDOR_PALETTE", "get_settings"]
