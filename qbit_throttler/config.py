"""
Configuration management for qBit Throttler.

Settings come from environment variables or a ``.env`` file and are fixed for
the lifetime of the process.
"""
from typing import List, Optional, Tuple
from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from qbit_throttler.constants import (
    ACTIVE_WITHIN_SECONDS,
    HTTP_CLIENT_TIMEOUT_SECONDS,
    POLL_INTERVAL_SECONDS,
    THROTTLED_UPLOAD_LIMIT_BYTES,
)
from qbit_throttler.utils.errors import ConfigurationError

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # qBittorrent
    qb_address: str = Field(..., description="qBittorrent Web UI base URL")
    qb_username: str = Field(..., description="qBittorrent Web UI username")
    qb_password: SecretStr = Field(..., description="qBittorrent Web UI password")

    # Jellyfin / Emby
    jellyfin_address: str = Field(..., description="Jellyfin base URL")
    jellyfin_api_token: SecretStr = Field(..., description="Jellyfin API key")
    jellyfin_active_within_secs: int = Field(
        ACTIVE_WITHIN_SECONDS,
        gt=0,
        description="Sessions seen within this many seconds count as active"
    )

    # Behaviour
    poll_interval_secs: int = Field(POLL_INTERVAL_SECONDS, gt=0, description="Polling interval in seconds")
    retry_delay_secs: Optional[int] = Field(
        None,
        gt=0,
        description="Wait before retrying a failed login (defaults to the poll interval)"
    )
    throttled_upload_limit: int = Field(
        THROTTLED_UPLOAD_LIMIT_BYTES,
        gt=0,
        description="Upload limit in bytes/sec while a session is active"
    )
    request_timeout_secs: float = Field(HTTP_CLIENT_TIMEOUT_SECONDS, gt=0, description="Per-request timeout")
    exit_on_sample_failure: bool = Field(
        True,
        description="Stop the service when Jellyfin cannot be sampled instead of skipping the cycle"
    )
    restore_on_shutdown: bool = Field(True, description="Remove the upload limit on clean shutdown")

    # Logging
    log_level: str = Field("INFO", description="loguru level for console and file output")
    log_file: Optional[str] = Field(None, description="Also log to this file, rotated at 10 MB (unset = console only)")

    @field_validator("qb_username")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("qb_address", "jellyfin_address")
    @classmethod
    def _base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("qb_password", "jellyfin_api_token")
    @classmethod
    def _secret_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return value

    @property
    def retry_delay(self) -> int:
        """Seconds to wait before re-attempting a failed login."""
        return self.retry_delay_secs or self.poll_interval_secs


def _split_errors(error: ValidationError) -> Tuple[List[str], List[str]]:
    """Split pydantic errors into missing and invalid environment variable names."""
    missing: List[str] = []
    invalid: List[str] = []
    for err in error.errors():
        key = str(err["loc"][0]).upper() if err["loc"] else "<settings>"
        if err["type"] == "missing":
            missing.append(key)
        else:
            invalid.append(f"{key} ({err['msg']})")
    return missing, invalid


def load_settings(env_file: Optional[str] = ".env", **overrides) -> Settings:
    """
    Load settings from the environment.

    Args:
        env_file: Optional dotenv file to read in addition to the environment
        **overrides: Explicit values that take precedence over the environment

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: If required settings are missing or values are invalid
    """
    try:
        return Settings(_env_file=env_file, **overrides)
    except ValidationError as e:
        missing, invalid = _split_errors(e)
        raise ConfigurationError(missing, invalid) from e
