"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - StorageConfig (known-dates blob)
    - SourceConfig (remote available-dates endpoint)

Exports:
    WatchConfig: Main configuration class

Dependencies:
    pydantic: BaseModel for configuration validation
    zoneinfo: Calendar timezone resolution
    config.storage_config: StorageConfig
    config.source_config: SourceConfig
    config.defaults: Default value constants

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
    Built once at startup and handed to the service; nothing reads the
    environment mid-run.
"""

import os
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic import BaseModel, Field, field_validator

from exceptions import ConfigurationError
from .storage_config import StorageConfig
from .source_config import SourceConfig
from .defaults import WatchDefaults


def resolve_timezone(name: str) -> tzinfo:
    """
    Resolve an IANA zone name.

    UTC is resolved without the tz database so slim images work.

    Raises:
        ValueError: Unknown zone
    """
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone '{name}': {e}")


class WatchConfig(BaseModel):
    """
    Application configuration - composition of domain configs.
    """

    # ========================================================================
    # Core Settings
    # ========================================================================

    schedule: str = Field(
        default=WatchDefaults.SCHEDULE,
        description="NCRONTAB expression for the timer trigger (seconds first)",
        examples=["0 0 * * * *", "0 */30 * * * *"]
    )

    timezone_name: str = Field(
        default=WatchDefaults.TIMEZONE,
        description="IANA zone whose calendar date defines 'today' for pruning"
    )

    debug_logging: bool = Field(
        default=WatchDefaults.DEBUG_LOGGING,
        description="Enable DEBUG level loggers (DEBUG_LOGGING=true)"
    )

    # ========================================================================
    # Domain Configs
    # ========================================================================

    storage: StorageConfig
    source: SourceConfig = Field(default_factory=SourceConfig)

    @field_validator('schedule')
    @classmethod
    def validate_schedule(cls, v: str) -> str:
        if len(v.split()) != 6:
            raise ValueError(f"Schedule '{v}' must have 6 NCRONTAB fields (seconds first)")
        return v

    @field_validator('timezone_name')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        resolve_timezone(v)
        return v

    @property
    def tz(self) -> tzinfo:
        return resolve_timezone(self.timezone_name)

    def debug_dict(self) -> dict:
        """Sanitized configuration (connection string masked)."""
        return {
            'schedule': self.schedule,
            'timezone': self.timezone_name,
            'debug_logging': self.debug_logging,
            'storage': self.storage.debug_dict(),
            'source': {
                'url': self.source.url,
                'business_id': self.source.business_id,
                'sp_id': self.source.sp_id,
                'timeout_seconds': self.source.timeout_seconds,
            },
        }

    @classmethod
    def from_environment(cls) -> 'WatchConfig':
        """
        Load all configs from environment.

        Raises:
            ConfigurationError: Anything missing or malformed
        """
        try:
            return cls(
                schedule=os.environ.get("WATCH_SCHEDULE", WatchDefaults.SCHEDULE),
                timezone_name=os.environ.get("WATCH_TIMEZONE", WatchDefaults.TIMEZONE),
                debug_logging=os.environ.get("DEBUG_LOGGING", "false").lower() == "true",
                storage=StorageConfig.from_environment(),
                source=SourceConfig.from_environment(),
            )
        except ValueError as e:
            # pydantic.ValidationError is a ValueError
            raise ConfigurationError(f"Invalid configuration: {e}") from e
