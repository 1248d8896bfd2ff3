"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """A required setting is missing or invalid for the selected components."""


class DirectorySettings(BaseModel):
    """Identity directory (Management API) configuration."""

    # Tenant domain, e.g. "example.eu.auth0.com"
    domain: str = "localhost:4000"

    # Management API token scoped to update:users
    # Can be set via DIRECTORY__API_TOKEN env var
    api_token: str | None = None

    # Per-request timeout in seconds
    timeout: float = 30.0

    @computed_field
    @property
    def base_url(self) -> str:
        """Management API base URL.

        In development: http://localhost:4000
        In production: https://<tenant domain>
        """
        if self.domain.startswith("localhost"):
            return f"http://{self.domain}"
        return f"https://{self.domain}"


class AuthSettings(BaseModel):
    """Caller session token configuration."""

    # Shared secret with the embedding application that issues session tokens
    jwt_secret: str = "CHANGE_ME_IN_PRODUCTION"  # Must be overridden in production
    jwt_algorithm: str = "HS256"


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override:

    Development (default):
        ENVIRONMENT=development
        DIRECTORY__DOMAIN=localhost:4000
        -> Management API: http://localhost:4000/api/v2

    Production:
        ENVIRONMENT=production
        DIRECTORY__DOMAIN=example.eu.auth0.com
        DIRECTORY__API_TOKEN=...
        AUTH__JWT_SECRET=...
        -> Management API: https://example.eu.auth0.com/api/v2
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows DIRECTORY__DOMAIN syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    host: str = "0.0.0.0"
    port: int = 8000

    # Nested settings
    directory: DirectorySettings = DirectorySettings()
    auth: AuthSettings = AuthSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
