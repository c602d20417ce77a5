"""Centralized configuration management with environment-aware defaults.

This module implements the configuration system using Pydantic Settings,
providing type-safe configuration with validation and environment variable
support.

Configuration sources (in order of precedence):
1. Environment variables (nested values use the ``__`` delimiter, e.g.
   ``CATALOG_CONFIG__SOURCE=file``)
2. .env file in project root
3. Default values in model definitions
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.constants import (
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    CORS_ALLOW_ORIGIN,
    CORS_MAX_AGE_SECONDS,
)


class LogConfig(BaseModel):
    """Logging configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_formatter_type: Literal["console", "json"] | None = Field(
        default=None,
        description="Log output formatter. Auto-detected if not specified.",
    )
    excluded_paths: list[str] = Field(
        default_factory=list,
        description="Paths to exclude from request logging",
    )
    slow_request_threshold_ms: int = Field(
        default=1000,
        gt=0,
        description="Threshold for slow request warnings (milliseconds)",
    )


class CorsConfig(BaseModel):
    """Cross-origin headers stamped on every response."""

    allow_origin: str = Field(default=CORS_ALLOW_ORIGIN)
    allow_methods: str = Field(default=CORS_ALLOW_METHODS)
    allow_headers: str = Field(default=CORS_ALLOW_HEADERS)
    max_age: int = Field(default=CORS_MAX_AGE_SECONDS, ge=0)

    def as_headers(self) -> dict[str, str]:
        """Render the configuration as response headers.

        Returns:
            dict[str, str]: Header name to value mapping.
        """
        return {
            "Access-Control-Allow-Origin": self.allow_origin,
            "Access-Control-Allow-Methods": self.allow_methods,
            "Access-Control-Allow-Headers": self.allow_headers,
            "Access-Control-Max-Age": str(self.max_age),
        }


class CatalogConfig(BaseModel):
    """Where the resource catalog is loaded from."""

    source: Literal["embedded", "file", "remote"] = Field(
        default="embedded",
        description="Catalog source: bundled data, a JSON file or a remote URL",
    )
    file_path: Path | None = Field(
        default=None,
        description="Path to a JSON catalog (required when source is 'file')",
    )
    remote_url: str | None = Field(
        default=None,
        description="URL returning the JSON catalog (required when source is 'remote')",
    )
    remote_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Timeout for fetching the remote catalog",
    )

    @field_validator("file_path", "remote_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for nullable fields."""
        if v == "":
            return None
        return v

    @model_validator(mode="after")
    def check_source_location(self) -> "CatalogConfig":
        """Ensure the selected source has somewhere to read from."""
        if self.source == "file" and self.file_path is None:
            msg = "catalog file_path is required when source is 'file'"
            raise ValueError(msg)
        if self.source == "remote" and not self.remote_url:
            msg = "catalog remote_url is required when source is 'remote'"
            raise ValueError(msg)
        return self


class ObservabilityConfig(BaseModel):
    """OpenTelemetry tracing configuration."""

    enable_tracing: bool = Field(
        default=False,
        description="Enable OpenTelemetry tracing",
    )
    exporter_type: Literal["console", "otlp", "none"] = Field(
        default="console",
        description="Trace exporter type. Console routes spans through Loguru.",
    )
    exporter_endpoint: str | None = Field(
        default=None,
        description="OTLP exporter endpoint",
    )
    trace_sample_rate: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Trace sampling rate (0.0 to 1.0)",
    )

    @field_validator("exporter_endpoint", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for nullable fields."""
        if v == "":
            return None
        return v


class Settings(BaseSettings):
    """Main settings class for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        env_nested_delimiter="__",
    )

    # Application settings
    app_name: str = Field(default="Resource Catalog API", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment the application is running in",
    )
    debug: bool = Field(default=False, description="Debug mode flag")

    # API settings. Docs are off by default: every unmatched path answers
    # with the 404 envelope.
    api_host: str = Field(default="127.0.0.1", description="API host")
    api_port: int = Field(default=8000, description="API port")
    docs_url: str | None = Field(default=None, description="Swagger UI URL")
    redoc_url: str | None = Field(default=None, description="ReDoc URL")
    openapi_url: str | None = Field(default=None, description="OpenAPI schema URL")

    log_config: LogConfig = Field(
        default_factory=LogConfig, description="Logging configuration"
    )
    cors_config: CorsConfig = Field(
        default_factory=CorsConfig, description="CORS response headers"
    )
    catalog_config: CatalogConfig = Field(
        default_factory=CatalogConfig, description="Catalog source configuration"
    )
    observability_config: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig, description="Observability configuration"
    )

    def model_post_init(self, __context: object) -> None:
        """Post initialization to set environment-based defaults."""
        super().model_post_init(__context)

        if self.log_config.log_formatter_type is None:
            self.log_config.log_formatter_type = self._detect_formatter()

    def _detect_formatter(self) -> Literal["console", "json"]:
        """Auto-detect log formatter based on environment."""
        # Managed runtimes collect stdout as structured logs
        if os.getenv("K_SERVICE") or os.getenv("AWS_EXECUTION_ENV"):
            return "json"
        if self.environment == "development":
            return "console"
        return "json"

    @field_validator("docs_url", "redoc_url", "openapi_url", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for nullable fields."""
        _ = cls
        if v == "":
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
