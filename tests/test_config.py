"""
Tests for gateway configuration and the credential gate.

These tests verify that GatewaySettings parses environment variables and that
validate_settings reports absent, blank and placeholder credentials.
"""

import os
from unittest.mock import patch

from pydantic import ValidationError
import pytest

from review_gateway import config as config_module
from review_gateway.config import (
    PLACEHOLDER_VALUES,
    REQUIRED_ENV_VARS,
    ConfigCheck,
    GatewaySettings,
    format_config_errors,
    get_settings,
    validate_settings,
)

VALID_ENV = {
    "SUPABASE_URL": "https://abc.supabase.co",
    "SUPABASE_SERVICE_ROLE_KEY": "service-role-key",
    "GOOGLE_GEMINI_API_KEY": "gemini-api-key",
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove any real credentials from the environment."""
    for key in (*REQUIRED_ENV_VARS, "PORT", "HOST", "LOG_LEVEL", "GEMINI_MODEL"):
        monkeypatch.delenv(key, raising=False)


class TestGatewaySettings:
    """Test suite for GatewaySettings."""

    def test_default_values(self) -> None:
        """Test that default values are set correctly."""
        settings = GatewaySettings(_env_file=None)
        assert settings.port == 3001
        assert settings.host == "0.0.0.0"
        assert settings.gemini_model == "gemini-2.0-flash"
        assert settings.supabase_test_table == "test"
        assert settings.data_store_workers == 4
        assert settings.cors_allow_origins == ["*"]
        assert settings.enable_tracing is False
        assert settings.supabase_url == ""

    def test_env_var_parsing(self) -> None:
        """Test that environment variables are correctly parsed."""
        env_vars = {
            **VALID_ENV,
            "PORT": "8080",
            "HOST": "127.0.0.1",
            "GEMINI_MODEL": "gemini-1.5-pro",
        }

        with patch.dict(os.environ, env_vars, clear=False):
            settings = GatewaySettings(_env_file=None)
            assert settings.supabase_url == "https://abc.supabase.co"
            assert settings.supabase_service_role_key == "service-role-key"
            assert settings.google_gemini_api_key == "gemini-api-key"
            assert settings.port == 8080
            assert settings.host == "127.0.0.1"
            assert settings.gemini_model == "gemini-1.5-pro"

    def test_invalid_port(self) -> None:
        """Test that an out-of-range port is rejected."""
        with patch.dict(os.environ, {"PORT": "70000"}, clear=False):
            with pytest.raises(ValidationError) as exc_info:
                GatewaySettings(_env_file=None)

            assert "PORT" in exc_info.value.errors()[0]["loc"]

    def test_log_level_normalized(self) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "debug"}, clear=False):
            assert GatewaySettings(_env_file=None).log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "LOUD"}, clear=False):
            with pytest.raises(ValidationError):
                GatewaySettings(_env_file=None)

    def test_base_url_uses_localhost_for_wildcard_host(self) -> None:
        settings = GatewaySettings(_env_file=None, PORT=4000)
        assert settings.base_url == "http://localhost:4000"

    def test_get_settings_is_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that get_settings returns the same instance."""
        monkeypatch.setattr(config_module, "_settings", None)
        assert get_settings() is get_settings()


class TestValidateSettings:
    """Tests for the credential gate."""

    def test_all_valid(self) -> None:
        settings = GatewaySettings(_env_file=None, **VALID_ENV)

        check = validate_settings(settings)

        assert check.ok
        assert check.invalid_keys == []

    def test_all_missing(self) -> None:
        check = validate_settings(GatewaySettings(_env_file=None))

        assert not check.ok
        assert check.invalid_keys == list(REQUIRED_ENV_VARS)

    @pytest.mark.parametrize("key", REQUIRED_ENV_VARS)
    def test_single_missing_key(self, key: str) -> None:
        env = {**VALID_ENV, key: ""}
        check = validate_settings(GatewaySettings(_env_file=None, **env))

        assert check.invalid_keys == [key]

    def test_blank_value_is_missing(self) -> None:
        env = {**VALID_ENV, "GOOGLE_GEMINI_API_KEY": "   "}
        check = validate_settings(GatewaySettings(_env_file=None, **env))

        assert check.invalid_keys == ["GOOGLE_GEMINI_API_KEY"]

    @pytest.mark.parametrize("placeholder", sorted(PLACEHOLDER_VALUES))
    def test_placeholder_values_rejected(self, placeholder: str) -> None:
        env = {**VALID_ENV, "SUPABASE_SERVICE_ROLE_KEY": placeholder}
        check = validate_settings(GatewaySettings(_env_file=None, **env))

        assert check.invalid_keys == ["SUPABASE_SERVICE_ROLE_KEY"]

    def test_reads_from_environment(self) -> None:
        env = {**VALID_ENV, "SUPABASE_URL": "your_supabase_url_here"}
        with patch.dict(os.environ, env, clear=False):
            check = validate_settings(GatewaySettings(_env_file=None))

        assert check.invalid_keys == ["SUPABASE_URL"]


class TestFormatConfigErrors:
    """Tests for diagnostic output."""

    def test_lists_each_invalid_key(self) -> None:
        lines = format_config_errors(
            ConfigCheck(invalid_keys=["SUPABASE_URL", "GOOGLE_GEMINI_API_KEY"])
        )

        assert "   - SUPABASE_URL" in lines
        assert "   - GOOGLE_GEMINI_API_KEY" in lines
        assert "   - SUPABASE_SERVICE_ROLE_KEY" not in lines

    def test_never_contains_values(self) -> None:
        env = {**VALID_ENV, "SUPABASE_URL": ""}
        check = validate_settings(GatewaySettings(_env_file=None, **env))

        output = "\n".join(format_config_errors(check))

        assert "service-role-key" not in output
        assert "gemini-api-key" not in output
