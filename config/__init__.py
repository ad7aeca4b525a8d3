# ============================================================================
# CLAUDE CONTEXT - CONFIG PACKAGE INIT
# ============================================================================
# STATUS: Configuration package exports
# PURPOSE: Singleton accessor and re-exports for watch configuration
# EXPORTS: WatchConfig, StorageConfig, SourceConfig, get_config, reset_config, debug_config
# INTERFACES: Pydantic BaseModel
# DEPENDENCIES: domain config modules
# ENTRY_POINTS: from config import get_config
# ============================================================================

"""
Configuration Package - Domain-Specific Configuration Modules

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # WatchConfig (composes domain configs)
    ├── storage_config.py        # Known-dates blob
    ├── source_config.py         # Remote available-dates endpoint
    ├── env_validation.py        # Regex validation of env vars at startup
    └── defaults.py              # Default values

Usage:
    from config import get_config
    config = get_config()
    container = config.storage.container_name
"""

from typing import Optional

from .storage_config import StorageConfig
from .source_config import SourceConfig
from .app_config import WatchConfig, resolve_timezone


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[WatchConfig] = None


def get_config() -> WatchConfig:
    """
    Get global configuration singleton.

    Raises:
        ConfigurationError: Environment incomplete (not cached, next call retries)
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = WatchConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration (tests, settings reload)."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).

    Returns:
        Dictionary with configuration values, or the load error
    """
    try:
        return get_config().debug_dict()
    except Exception as e:
        return {'error': str(e)}


__all__ = [
    'WatchConfig',
    'StorageConfig',
    'SourceConfig',
    'resolve_timezone',
    'get_config',
    'reset_config',
    'debug_config',
]
