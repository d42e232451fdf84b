"""Configuration management for transaction id recovery."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from xa_xid.ports.outbound.prepared_xacts import PREPARED_XACTS_QUERY


class RecoveryConfig(BaseModel):
    """Recovery configuration."""

    statement: str = Field(
        default=PREPARED_XACTS_QUERY,
        min_length=1,
        description="Query returning (gid, prepared, owner, database) rows",
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    metrics_port: int = Field(
        default=8001, ge=0, le=65535, description="Prometheus metrics port (0 picks a free port)"
    )
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="xa_xid", description="Service name for tracing")


class Config(BaseSettings):
    """Main configuration for xa_xid."""

    model_config = SettingsConfigDict(
        env_prefix="XA_XID_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    recovery: RecoveryConfig = Field(default_factory=RecoveryConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
