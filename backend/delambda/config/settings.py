"""Configuration management for delambda.

Settings come from environment variables prefixed with ``DELAMBDA_`` (or a
``.env`` file) and can be overridden by CLI flags through
:func:`update_settings`.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DelambdaSettings(BaseSettings):
    """Main configuration class for delambda.

    Args:
        aws_region: AWS region; None defers to the SDK default chain.
        aws_profile: AWS named profile; None defers to the SDK default chain.
        update_wait_attempts: Polls before giving up on a function update.
        update_wait_interval_seconds: Delay between polls.
        max_retries: botocore retry attempts for throttled API calls.
        log_level: Application log level.
        log_format: Logging format string.

    Returns:
        A validated settings object sourced from environment variables and defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="DELAMBDA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AWS Configuration
    aws_region: Optional[str] = Field(
        default=None, description="AWS region (falls back to AWS_REGION / profile)"
    )

    aws_profile: Optional[str] = Field(
        default=None, description="AWS profile (falls back to AWS_PROFILE)"
    )

    max_retries: int = Field(
        default=10, ge=0, le=50, description="botocore standard-mode retry attempts"
    )

    # Function update polling
    update_wait_attempts: int = Field(
        default=60, ge=1, description="Maximum polls while waiting for an update"
    )

    update_wait_interval_seconds: float = Field(
        default=5.0, ge=0.0, description="Seconds between update polls"
    )

    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Logging level"
    )

    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format string",
    )

    def get_client_config(self) -> dict:
        """Get keyword arguments for building AWS clients."""
        return {
            "region": self.aws_region,
            "profile": self.aws_profile,
            "max_retries": self.max_retries,
        }


# Global settings instance
_settings: Optional[DelambdaSettings] = None


def get_settings() -> DelambdaSettings:
    """Get global settings instance.

    Returns:
        DelambdaSettings: Singleton settings instance.
    """
    global _settings
    if _settings is None:
        _settings = DelambdaSettings()
    return _settings


def update_settings(**kwargs) -> DelambdaSettings:
    """Update global settings with new values.

    Keys whose value is None are ignored so unset CLI flags do not clobber
    environment configuration.

    Args:
        **kwargs: Fields to override when constructing new settings.

    Returns:
        DelambdaSettings: Newly created settings instance.
    """
    global _settings
    overrides = {key: value for key, value in kwargs.items() if value is not None}
    _settings = DelambdaSettings(**overrides)
    return _settings


def reset_settings():
    """Reset settings to default values.

    This clears the cached singleton so the next call to get_settings will
    construct a fresh instance using current environment variables.
    """
    global _settings
    _settings = None
