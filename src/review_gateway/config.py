"""
Configuration management for the code review gateway.

This module uses Pydantic Settings to load configuration from environment variables
(and an optional ``.env`` file) and checks that the credentials needed to reach
Supabase and Google Gemini were actually filled in.
"""

from dataclasses import dataclass, field

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


REQUIRED_ENV_VARS: tuple[str, ...] = (
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "GOOGLE_GEMINI_API_KEY",
)

# Values shipped in the example .env file
PLACEHOLDER_VALUES: frozenset[str] = frozenset(
    {
        "your_supabase_url_here",
        "your_supabase_anon_key_here",
        "your_supabase_service_role_key_here",
        "your_google_gemini_api_key_here",
    }
)


class GatewaySettings(BaseSettings):
    """
    Central configuration for the gateway.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # === Required Credentials ===
    supabase_url: str = Field(
        default="",
        alias="SUPABASE_URL",
        description="Project URL of the Supabase instance",
    )

    supabase_service_role_key: str = Field(
        default="",
        alias="SUPABASE_SERVICE_ROLE_KEY",
        description="Service role key used by the Supabase client",
    )

    google_gemini_api_key: str = Field(
        default="",
        alias="GOOGLE_GEMINI_API_KEY",
        description="API key for Google Gemini",
    )

    # === Server Configuration ===
    host: str = Field(
        default="0.0.0.0",
        alias="HOST",
        description="Interface to bind the HTTP server to",
    )

    port: int = Field(
        default=3001,
        alias="PORT",
        ge=1,
        le=65535,
        description="Port to bind the HTTP server to",
    )

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ALLOW_ORIGINS",
        description="Origins allowed by the CORS middleware",
    )

    # === Upstream Services ===
    gemini_model: str = Field(
        default="gemini-2.0-flash",
        alias="GEMINI_MODEL",
        description="Gemini model used for every generation request",
    )

    supabase_test_table: str = Field(
        default="test",
        alias="SUPABASE_TEST_TABLE",
        description="Table read by the Supabase connectivity probe",
    )

    data_store_workers: int = Field(
        default=4,
        alias="DATA_STORE_WORKERS",
        ge=1,
        description="Threads used to run blocking Supabase calls",
    )

    # === Logging & Telemetry ===
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    enable_tracing: bool = Field(
        default=False,
        alias="ENABLE_TRACING",
        description="If true, emit OpenTelemetry spans for requests and upstream calls",
    )

    otel_exporter_endpoint: str = Field(
        default="http://127.0.0.1:4317",
        alias="OTEL_EXPORTER_OTLP_ENDPOINT",
        description="OTLP gRPC endpoint for exporting traces",
    )

    otel_exporter_insecure: bool = Field(
        default=True,
        alias="OTEL_EXPORTER_OTLP_INSECURE",
        description="Use insecure (non-TLS) connection for OTLP exporter",
    )

    @property
    def base_url(self) -> str:
        """Local URL used in startup log lines."""
        host = "localhost" if self.host in {"0.0.0.0", "::"} else self.host
        return f"http://{host}:{self.port}"

    def required_values(self) -> dict[str, str]:
        """Map of required env var names to their loaded values."""
        return {
            "SUPABASE_URL": self.supabase_url,
            "SUPABASE_SERVICE_ROLE_KEY": self.supabase_service_role_key,
            "GOOGLE_GEMINI_API_KEY": self.google_gemini_api_key,
        }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels} (got {v})")
        return v_upper


@dataclass(frozen=True)
class ConfigCheck:
    """Outcome of validating the required credentials."""

    invalid_keys: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.invalid_keys


def is_placeholder(value: str) -> bool:
    return value.strip() in PLACEHOLDER_VALUES


def validate_settings(settings: GatewaySettings) -> ConfigCheck:
    """
    Check every required credential without touching the process.

    A key is invalid when it is absent, blank, or still holds one of the
    example placeholder values. Keys are reported in ``REQUIRED_ENV_VARS`` order.

    Args:
        settings: Loaded gateway settings

    Returns:
        ConfigCheck listing the invalid keys (empty when configuration is usable)
    """
    values = settings.required_values()
    invalid = [
        key
        for key in REQUIRED_ENV_VARS
        if not values.get(key, "").strip() or is_placeholder(values[key])
    ]
    return ConfigCheck(invalid_keys=invalid)


def format_config_errors(check: ConfigCheck) -> list[str]:
    """Build diagnostic lines for a failed check. Values are never included."""
    lines = ["Missing or invalid environment variables:"]
    lines.extend(f"   - {key}" for key in check.invalid_keys)
    lines.extend(
        [
            "Please update your .env file with valid credentials",
            "   Supabase: https://supabase.com/dashboard/project/[your-project]/settings/api",
            "   Google Gemini: https://makersuite.google.com/app/apikey",
            "Server will not start until valid credentials are provided",
        ]
    )
    return lines


# Global settings instance
_settings: GatewaySettings | None = None


def get_settings() -> GatewaySettings:
    """
    Get the global GatewaySettings instance.

    Returns:
        GatewaySettings: The global configuration instance
    """
    global _settings
    if _settings is None:
        _settings = GatewaySettings()
    return _settings
