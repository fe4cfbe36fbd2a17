"""Application configuration using Pydantic settings."""
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str):
    """Simple enum-like helper for environment tagging."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class AnalysisMode(str):
    """Which analyzer the dashboard uses."""

    LIVE = "live"
    MOCK = "mock"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SAFEGUARD_", env_file=".env", env_file_encoding="utf-8"
    )

    app_name: str = Field(default="SafeGuard Moderation Service", description="Service name")
    api_prefix: str = Field(default="", description="Base API prefix")
    environment: str = Field(default=Environment.DEVELOPMENT, description="Runtime environment tag")
    log_level: str = Field(default="INFO", description="Log level for the safeguard logger")
    ai_gateway_url: str = Field(
        default="https://ai.gateway.lovable.dev/v1/chat/completions",
        description="Chat-completion endpoint of the AI gateway",
    )
    ai_gateway_api_key: str | None = Field(
        default=None, description="Bearer token for the AI gateway"
    )
    ai_model: str = Field(
        default="google/gemini-2.5-flash", description="Model used for moderation"
    )
    upstream_timeout: float | None = Field(
        default=None,
        description="Upstream request timeout in seconds (unset keeps the client default)",
    )
    cors_allow_origin: str = Field(default="*", description="Access-Control-Allow-Origin value")
    cors_allow_headers: str = Field(
        default="authorization, x-client-info, apikey, content-type",
        description="Access-Control-Allow-Headers value",
    )
    analysis_mode: str = Field(
        default=AnalysisMode.LIVE, description="Dashboard analyzer: live or mock"
    )
    relay_url: str | None = Field(
        default=None,
        description="Base URL of a remote relay; unset runs the relay in-process",
    )


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings instance."""
    return AppSettings()
