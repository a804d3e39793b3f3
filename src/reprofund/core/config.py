# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Core configuration - centralized config for the reprofund package.

All environment-based configuration should flow through this module.

Usage:
    from reprofund.core.config import get_config
    config = get_config()

    backend = config.store_backend
    log_level = config.log_level
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STORE_BACKENDS = ("memory", "file", "postgres")


class CoreSettings(BaseSettings):
    """Core configuration settings for reprofund.

    Settings can be configured via environment variables with the
    REPROFUND_ prefix, or a .env file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPROFUND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # STORE SETTINGS
    # ==========================================================================

    store_backend: str = Field(
        default="memory",
        description="Storage backend: 'memory', 'file' or 'postgres'",
    )
    data_dir: Path = Field(
        default=Path.home() / ".reprofund" / "data",
        description="Directory used by the file backend",
    )
    max_record_bytes: int = Field(
        default=1024,
        description="Upper bound on the encoded size of a single record",
    )
    anonymous_caller: str = Field(
        default="anonymous",
        description="Owner identity recorded when the caller is not identified",
    )

    # ==========================================================================
    # DATABASE SETTINGS (postgres backend)
    # ==========================================================================

    db_host: str = Field(default="localhost", description="Database host")
    db_port: int = Field(default=5432, description="Database port")
    db_name: str = Field(default="reprofund", description="Database name")
    db_user: str = Field(default="reprofund", description="Database user")
    db_password: str = Field(default="", description="Database password")

    db_pool_min: int = Field(default=1, description="Minimum pool connections")
    db_pool_max: int = Field(default=10, description="Maximum pool connections")
    db_pool_timeout: int = Field(default=10, description="Seconds to wait for a pooled connection")

    # ==========================================================================
    # LOGGING SETTINGS
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="",
        description="Log format: 'json', 'text', or '' (auto-detect)",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (optional)",
    )

    @field_validator("store_backend")
    @classmethod
    def _known_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in STORE_BACKENDS:
            raise ValueError(f"store_backend must be one of {STORE_BACKENDS}, got {value!r}")
        return value

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def database_url(self) -> str:
        """Construct database URL."""
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def connection_params(self) -> dict:
        """Get database connection parameters dict."""
        return {
            "host": self.db_host,
            "port": self.db_port,
            "dbname": self.db_name,
            "user": self.db_user,
            "password": self.db_password,
        }

    @property
    def pool_config(self) -> dict:
        """Get connection pool configuration."""
        return {
            "minconn": self.db_pool_min,
            "maxconn": self.db_pool_max,
        }


# ==========================================================================
# GLOBAL CONFIG INSTANCE (lazy loaded)
# ==========================================================================

_config: CoreSettings | None = None


def get_config() -> CoreSettings:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = CoreSettings()
    return _config


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing."""
    global _config
    _config = None
