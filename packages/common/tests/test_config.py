"""Tests for configuration management module.

Tests cover:
- Settings defaults
- Environment variable overrides
- Field validators (log_level, log_format, copy_concurrency)
- Settings caching (lru_cache)
"""

from __future__ import annotations

import os

import pytest
from pydantic import ValidationError

from tileset_common.config import Settings, get_settings

pytestmark = pytest.mark.unit


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def clean_env():
    """Provide a clean environment without config-related vars."""
    env_vars = [
        "TILESET_ROOT_JSON",
        "TILESET_COPY_CONCURRENCY",
        "TILESET_LOG_LEVEL",
        "TILESET_LOG_FORMAT",
    ]
    original_values = {var: os.environ.get(var) for var in env_vars}

    for var in env_vars:
        if var in os.environ:
            del os.environ[var]

    yield

    for var, value in original_values.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]


@pytest.fixture
def clear_settings_cache():
    """Clear the settings cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Test Default Values
# =============================================================================


class TestSettingsDefaults:
    """Test Settings has correct default values."""

    def test_root_json_default(self, clean_env):
        """Test root_json defaults to tileset.json."""
        settings = Settings(_env_file=None)

        assert settings.root_json == "tileset.json"

    def test_copy_concurrency_default(self, clean_env):
        """Test copy_concurrency defaults to 1024."""
        settings = Settings(_env_file=None)

        assert settings.copy_concurrency == 1024

    def test_log_level_default(self, clean_env):
        """Test log_level defaults to INFO."""
        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"

    def test_log_format_default(self, clean_env):
        """Test log_format defaults to console."""
        settings = Settings(_env_file=None)

        assert settings.log_format == "console"


# =============================================================================
# Test Environment Variable Overrides
# =============================================================================


class TestEnvironmentOverrides:
    """Test Settings can be overridden via environment variables."""

    def test_root_json_override(self, clean_env):
        """Test TILESET_ROOT_JSON environment variable override."""
        os.environ["TILESET_ROOT_JSON"] = "nested/root.json"

        settings = Settings(_env_file=None)

        assert settings.root_json == "nested/root.json"

    def test_copy_concurrency_override(self, clean_env):
        """Test TILESET_COPY_CONCURRENCY is parsed as int."""
        os.environ["TILESET_COPY_CONCURRENCY"] = "16"

        settings = Settings(_env_file=None)

        assert settings.copy_concurrency == 16

    def test_log_level_override(self, clean_env):
        """Test TILESET_LOG_LEVEL environment variable override."""
        os.environ["TILESET_LOG_LEVEL"] = "DEBUG"

        settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"

    def test_log_format_override(self, clean_env):
        """Test TILESET_LOG_FORMAT environment variable override."""
        os.environ["TILESET_LOG_FORMAT"] = "json"

        settings = Settings(_env_file=None)

        assert settings.log_format == "json"

    def test_unprefixed_vars_are_ignored(self, clean_env, monkeypatch):
        """Test plain ROOT_JSON does not leak into settings."""
        monkeypatch.setenv("ROOT_JSON", "other.json")

        settings = Settings(_env_file=None)

        assert settings.root_json == "tileset.json"


# =============================================================================
# Test Validators
# =============================================================================


class TestValidators:
    """Test field validators."""

    def test_log_level_is_uppercased(self, clean_env):
        """Test lower-case log levels are normalised."""
        settings = Settings(_env_file=None, log_level="warning")

        assert settings.log_level == "WARNING"

    def test_invalid_log_level(self, clean_env):
        """Test unknown log level is rejected."""
        with pytest.raises(ValidationError, match="log_level"):
            Settings(_env_file=None, log_level="LOUD")

    def test_log_format_is_lowercased(self, clean_env):
        """Test log_format is normalised."""
        settings = Settings(_env_file=None, log_format="JSON")

        assert settings.log_format == "json"

    def test_invalid_log_format(self, clean_env):
        """Test unknown log format is rejected."""
        with pytest.raises(ValidationError, match="log_format"):
            Settings(_env_file=None, log_format="xml")

    def test_copy_concurrency_must_be_positive(self, clean_env):
        """Test copy_concurrency below 1 is rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, copy_concurrency=0)


# =============================================================================
# Test Caching
# =============================================================================


class TestGetSettings:
    """Test get_settings caching."""

    def test_returns_same_instance(self, clean_env, clear_settings_cache):
        """Test get_settings is cached."""
        assert get_settings() is get_settings()

    def test_cache_clear_picks_up_env(self, clean_env, clear_settings_cache):
        """Test cache_clear reloads environment."""
        first = get_settings()
        os.environ["TILESET_ROOT_JSON"] = "changed.json"
        get_settings.cache_clear()

        second = get_settings()

        assert first.root_json == "tileset.json"
        assert second.root_json == "changed.json"
