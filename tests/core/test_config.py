"""Tests for reprofund.core.config - CoreSettings and global config management.

Tests cover:
- Settings loading with defaults
- Environment variable overrides
- Singleton behavior (get_config / clear_config_cache)
- Computed properties (database_url, connection_params, pool_config)
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from reprofund.core.config import CoreSettings, clear_config_cache, get_config

# ============================================================================
# CoreSettings - Default Values
# ============================================================================


class TestCoreSettingsDefaults:
    """Test that CoreSettings loads with correct default values."""

    def test_store_defaults(self, clean_env):
        settings = CoreSettings()

        assert settings.store_backend == "memory"
        assert settings.data_dir == Path.home() / ".reprofund" / "data"
        assert settings.max_record_bytes == 1024
        assert settings.anonymous_caller == "anonymous"

    def test_database_defaults(self, clean_env):
        settings = CoreSettings()

        assert settings.db_host == "localhost"
        assert settings.db_port == 5432
        assert settings.db_name == "reprofund"
        assert settings.db_user == "reprofund"
        assert settings.db_password == ""
        assert settings.db_pool_min == 1
        assert settings.db_pool_max == 10
        assert settings.db_pool_timeout == 10

    def test_logging_defaults(self, clean_env):
        settings = CoreSettings()

        assert settings.log_level == "INFO"
        assert settings.log_format == ""
        assert settings.log_file is None


# ============================================================================
# CoreSettings - Environment Overrides
# ============================================================================


class TestCoreSettingsEnv:
    """Environment variables with the REPROFUND_ prefix override defaults."""

    def test_store_backend_from_env(self, clean_env, monkeypatch, tmp_path):
        monkeypatch.setenv("REPROFUND_STORE_BACKEND", "FILE")
        monkeypatch.setenv("REPROFUND_DATA_DIR", str(tmp_path))
        settings = CoreSettings()

        assert settings.store_backend == "file"
        assert settings.data_dir == tmp_path

    def test_unknown_backend_rejected(self, clean_env, monkeypatch):
        monkeypatch.setenv("REPROFUND_STORE_BACKEND", "redis")
        with pytest.raises(ValidationError):
            CoreSettings()

    def test_db_settings_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("REPROFUND_DB_HOST", "db.internal")
        monkeypatch.setenv("REPROFUND_DB_PORT", "6543")
        monkeypatch.setenv("REPROFUND_DB_PASSWORD", "secret")
        settings = CoreSettings()

        assert settings.db_host == "db.internal"
        assert settings.db_port == 6543
        assert settings.db_password == "secret"

    def test_record_limit_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("REPROFUND_MAX_RECORD_BYTES", "4096")
        assert CoreSettings().max_record_bytes == 4096


# ============================================================================
# Computed Properties
# ============================================================================


class TestComputedProperties:
    def test_database_url(self, clean_env):
        settings = CoreSettings(db_user="u", db_password="p", db_host="h", db_port=1, db_name="n")
        assert settings.database_url == "postgresql://u:p@h:1/n"

    def test_connection_params(self, clean_env):
        settings = CoreSettings()
        assert settings.connection_params == {
            "host": "localhost",
            "port": 5432,
            "dbname": "reprofund",
            "user": "reprofund",
            "password": "",
        }

    def test_pool_config(self, clean_env):
        settings = CoreSettings(db_pool_min=2, db_pool_max=4)
        assert settings.pool_config == {"minconn": 2, "maxconn": 4}


# ============================================================================
# Singleton
# ============================================================================


class TestGetConfig:
    def test_returns_same_instance(self, clean_env):
        assert get_config() is get_config()

    def test_clear_cache_reloads(self, clean_env, monkeypatch):
        first = get_config()
        monkeypatch.setenv("REPROFUND_ANONYMOUS_CALLER", "nobody")
        assert get_config().anonymous_caller == "anonymous"

        clear_config_cache()
        second = get_config()
        assert second is not first
        assert second.anonymous_caller == "nobody"
