"""Gateway access configuration using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from typing import ClassVar, Literal

from pydantic import Field, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewayApiSettings(BaseSettings):
    """Process/runtime settings for the gateway access API server."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="GATEWAY_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Bind address for the gateway API.")
    port: PositiveInt = Field(default=8090, description="Port for the gateway API.")
    reload: bool = Field(default=False, description="Enable uvicorn auto-reload (dev only).")
    log_level: Literal["critical", "error", "warning", "info", "debug", "trace"] = Field(
        default="info",
        description="Log level for gateway API / uvicorn.",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed by the CORS middleware.",
    )
    strict_preference_keys: bool = Field(
        default=True,
        description="Reject preference keys outside the known compute/storage key sets.",
    )
    dev_bypass_token: str | None = Field(
        default=None,
        description="Static bearer token accepted without JWT validation (dev only).",
    )
    dev_bypass_subject: str = Field(default="dev-user", description="Subject reported for the bypass token.")
    dev_bypass_roles: list[str] = Field(
        default_factory=lambda: ["admin"],
        description="Roles granted to the bypass token.",
    )
    jwt_secret: str = Field(default="dev-secret", description="Secret used to verify bearer JWTs.")
    jwt_algorithm: str = Field(default="HS256", description="Algorithm used to verify bearer JWTs.")
    jwt_access_minutes: PositiveInt = Field(default=60, description="Lifetime of tokens issued by the CLI.")


class GatewayClientSettings(BaseSettings):
    """Settings for ``GatewayClient`` when built from the environment."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="GATEWAY_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(default="http://127.0.0.1:8090", description="Base URL of the gateway API.")
    token: str | None = Field(default=None, description="Bearer token sent with every request.")
    timeout_seconds: PositiveFloat = Field(default=10.0, description="Per-request timeout.")
    max_retries: int = Field(default=3, ge=0, description="Retries for idempotent requests.")
    retry_delay_seconds: float = Field(default=1.0, ge=0, description="Base delay for exponential backoff.")


@lru_cache()
def get_api_settings() -> GatewayApiSettings:
    """Return memoized API process settings."""

    return GatewayApiSettings()


@lru_cache()
def get_client_settings() -> GatewayClientSettings:
    return GatewayClientSettings()
