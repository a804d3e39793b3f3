# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Server configuration using pydantic-settings."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from reprofund.core.config import CoreSettings


def get_package_version() -> str:
    """Get the package version from installed metadata."""
    try:
        return version("reprofund")
    except PackageNotFoundError:
        return "0.0.0-dev"


class ServerSettings(CoreSettings):
    """Configuration for the reprofund HTTP server.

    Inherits core settings (store backend, database, logging) and adds
    HTTP settings. Environment variables use the REPROFUND_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPROFUND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Host to bind to")
    port: int = Field(default=8430, description="Port to bind to")
    caller_header: str = Field(
        default="X-Caller-Id",
        description="Request header carrying the caller identity",
    )
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost", "http://127.0.0.1"],
        description="CORS allowed origins",
    )


_settings: ServerSettings | None = None


def get_settings() -> ServerSettings:
    """Get the global server settings instance."""
    global _settings
    if _settings is None:
        _settings = ServerSettings()
    return _settings


def clear_settings_cache() -> None:
    """Clear the settings cache. Useful for testing."""
    global _settings
    _settings = None
