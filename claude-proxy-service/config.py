"""Configuration management for the Claude Proxy Service.

Uses Pydantic Settings for type-safe configuration with .env file support.
The caller's API key is never configured here; it is passed through per request.
"""

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # Service Configuration
    host: str = "0.0.0.0"
    port: int = 3000

    # Upstream (Anthropic Messages API)
    upstream_url: str = "https://api.anthropic.com/v1/messages"
    anthropic_version: str = "2023-06-01"
    upstream_timeout_seconds: float = 25.0

    # Inbound body limit (10 MiB)
    max_body_bytes: int = 10 * 1024 * 1024

    # How often a pending relay checks whether the caller went away
    disconnect_poll_seconds: float = 0.5

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def upstream_timeout(self) -> httpx.Timeout:
        """Per-operation httpx timeout matching the overall relay bound."""
        return httpx.Timeout(self.upstream_timeout_seconds)


settings = Settings()
