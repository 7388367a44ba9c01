"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from wismo.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.server.port
    3000

    # Or with environment variables:
    # WISMO_BACKEND_BASE_URL=https://orders.internal/
    # WISMO_LOG_LEVEL=DEBUG
    # PORT=8080
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import AliasChoices, Field, PositiveFloat, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BACKEND_URL = "https://ca-odpr-eus-gt-wismo-dev.agreeableriver-391c9765.eastus.azurecontainerapps.io/"


class BackendSettings(BaseSettings):
    """Order-management backend the gateway talks to."""

    model_config = SettingsConfigDict(env_prefix="WISMO_BACKEND_", extra="ignore")

    base_url: str = Field(default=DEFAULT_BACKEND_URL, description="Fixed base location of the backend")
    timeout: PositiveFloat | None = Field(default=30.0, description="Request timeout in seconds (None = wait forever)")
    verify_ssl: bool = True
    user_agent: str = "wismo-mcp/1.0"

    @field_validator("base_url")
    @classmethod
    def _require_scheme(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v if v.endswith("/") else f"{v}/"

    @field_validator("timeout", mode="before")
    @classmethod
    def _empty_disables(cls, v: object) -> object:
        """An empty or 'none' value turns the timeout off."""
        return None if isinstance(v, str) and v.strip().lower() in ("", "none", "null") else v


class ServerSettings(BaseSettings):
    """Inbound MCP endpoint."""

    model_config = SettingsConfigDict(env_prefix="WISMO_SERVER_", extra="ignore", populate_by_name=True)

    host: str = "0.0.0.0"
    port: Annotated[int, Field(ge=1, le=65535)] = Field(
        default=3000,
        validation_alias=AliasChoices("WISMO_SERVER_PORT", "PORT"),
    )
    path: str = Field(default="/mcp", pattern=r"^/")
    name: str = "mcp-streamable-http"
    version: str = "1.0.0"


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="WISMO_LOG_", extra="ignore")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class SchemaSettings(BaseSettings):
    """Domain schema enforcement on backend payloads."""

    model_config = SettingsConfigDict(env_prefix="WISMO_SCHEMA_", extra="ignore")

    validate_responses: bool = False
    max_split_depth: PositiveInt = Field(default=32, description="Deepest splitOrders nesting accepted")


class WismoSettings(BaseSettings):
    """Root settings for the order tools server.

    Loads configuration from environment variables with the WISMO_ prefix.

    Example environment variables:
        WISMO_BACKEND_TIMEOUT=10
        WISMO_LOG_FORMAT=json
        WISMO_SCHEMA_VALIDATE_RESPONSES=true
    """

    model_config = SettingsConfigDict(
        env_prefix="WISMO_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    backend: BackendSettings = Field(default_factory=BackendSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    domain: SchemaSettings = Field(default_factory=SchemaSettings)


@lru_cache(maxsize=1)
def get_settings() -> WismoSettings:
    """Get the global settings instance (cached)."""
    return WismoSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
