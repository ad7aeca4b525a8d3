"""
Infrastructure Layer.

Storage and remote-source access for the date watch.

Exports:
    RepositoryFactory: Builds repositories and clients from configuration
    IBlobRepository, BlobRepository: Azure Blob Storage access
    KnownDatesRepository, KnownDatesState: Persisted known-dates set
    AvailableDatesClient: Remote scheduling API client
"""

from .factory import RepositoryFactory
from .blob import IBlobRepository, BlobRepository
from .known_dates_repository import KnownDatesRepository, KnownDatesState
from .available_dates_client import AvailableDatesClient

__all__ = [
    'RepositoryFactory',
    'IBlobRepository',
    'BlobRepository',
    'KnownDatesRepository',
    'KnownDatesState',
    'AvailableDatesClient',
]
