"""Configuration management using pydantic-settings."""

from .settings import (
    BackendSettings,
    LoggingSettings,
    SchemaSettings,
    ServerSettings,
    WismoSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "BackendSettings",
    "LoggingSettings",
    "SchemaSettings",
    "ServerSettings",
    "WismoSettings",
    "clear_settings_cache",
    "get_settings",
]
