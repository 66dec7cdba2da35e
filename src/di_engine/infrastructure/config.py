"""Configuration management for the container."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ContainerConfig(BaseModel):
    """Resolution behaviour."""

    default_shared: bool = Field(
        default=True,
        description="Lifecycle recorded for keys resolved without registration",
    )
    max_depth: int = Field(
        default=64, ge=1, le=10000, description="Maximum nested resolution depth"
    )
    register_self: bool = Field(
        default=True, description="Bind the container to its own class on creation"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    metrics_enabled: bool = Field(
        default=False, description="Record resolution metrics on the global registry"
    )
    metrics_port: int | None = Field(
        default=None, ge=1, le=65535, description="Prometheus metrics port (no server if unset)"
    )
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="di_engine", description="Service name for tracing")


class Config(BaseSettings):
    """Main configuration for the container."""

    model_config = SettingsConfigDict(
        env_prefix="DI_ENGINE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    container: ContainerConfig = Field(default_factory=ContainerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
