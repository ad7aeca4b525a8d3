"""
Service Layer.

Exports:
    DateWatchService: Load → fetch → reconcile → persist coordinator
    build_date_watch_service: Wire the service from a WatchConfig
"""

from typing import Optional

from config import WatchConfig, get_config
from infrastructure import RepositoryFactory
from .date_watch_service import DateWatchService


def build_date_watch_service(config: Optional[WatchConfig] = None) -> DateWatchService:
    """
    Wire DateWatchService from configuration.

    Raises:
        ConfigurationError: Environment incomplete (before any I/O)
    """
    config = config or get_config()
    return DateWatchService(
        known_dates_repo=RepositoryFactory.create_known_dates_repository(config.storage),
        dates_client=RepositoryFactory.create_available_dates_client(config.source),
        tz=config.tz,
    )


__all__ = ['DateWatchService', 'build_date_watch_service']
