"""
Configuration Settings.

This module defines the hostbridge configuration using Pydantic's BaseSettings.
Values are loaded from environment variables and an optional .env file.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hostbridge.runtime.version import compare_sdk_versions
from hostbridge.schemas.core import HostClientType

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("simple", "detailed", "json")


class Settings(BaseSettings):
    """
    hostbridge settings model.

    All properties are bound from environment variables and the .env file.
    Sessions take an explicit ``Settings`` instance so that isolated sessions
    (e.g. in tests) never share configuration through module state.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Logging Configuration
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        description="hostbridge logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="HOSTBRIDGE_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Log line format (simple, detailed, json)",
        alias="HOSTBRIDGE_LOG_FORMAT",
    )

    # =====================================================================
    # Session Defaults
    # =====================================================================
    default_sdk_version: str = Field(
        default="1.6.0",
        description="Client SDK version assumed for hosts that do not report one",
        alias="HOSTBRIDGE_DEFAULT_SDK_VERSION",
    )
    default_host_client_type: HostClientType = Field(
        default=HostClientType.web,
        description="Host client type assumed when initialization does not name one",
        alias="HOSTBRIDGE_DEFAULT_HOST_CLIENT_TYPE",
    )
    reject_pending_on_teardown: bool = Field(
        default=True,
        description="Reject requests still pending at teardown instead of discarding them",
        alias="HOSTBRIDGE_REJECT_PENDING_ON_TEARDOWN",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in _LOG_FORMATS:
            raise ValueError(f"log format must be one of {', '.join(_LOG_FORMATS)}")
        return fmt

    @field_validator("default_sdk_version")
    @classmethod
    def _check_sdk_version(cls, value: str) -> str:
        # Raises ValueError for non-numeric segments.
        compare_sdk_versions(value, "0")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings loaded from the environment."""
    return Settings()
