"""
Configuration settings for waiter-errors.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from waiter_errors.retry.policy import RetryPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Waiter Errors"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Response identity ===
    SERVER_NAME: str = "waiter"  # Value of the `server` header on error responses

    # === Rendering ===
    TEMPLATES_DIR: Optional[str] = None  # Override for packaged error.html / error.txt
    SUPPORT_INFO: list[dict[str, str]] = []  # e.g. [{"label": "Docs", "url": "https://..."}]

    # === Retry defaults ===
    RETRY_DELAY_MULTIPLIER: float = 1.0
    RETRY_INITIAL_DELAY_MS: int = 100
    RETRY_MAX_DELAY_MS: int = 300000  # 5 minutes
    RETRY_MAX_RETRIES: int = 10

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True

    def default_retry_policy(self) -> RetryPolicy:
        """Build a RetryPolicy from the RETRY_* settings."""
        return RetryPolicy(
            delay_multiplier=self.RETRY_DELAY_MULTIPLIER,
            initial_delay_ms=self.RETRY_INITIAL_DELAY_MS,
            max_delay_ms=self.RETRY_MAX_DELAY_MS,
            max_retries=self.RETRY_MAX_RETRIES,
        )


# Global settings instance
settings = Settings()
