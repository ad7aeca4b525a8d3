# ============================================================================
# CLAUDE CONTEXT - REPOSITORY FACTORY
# ============================================================================
# STATUS: Infrastructure - Central factory for repositories and clients
# PURPOSE: Build storage repositories and the remote client from configuration
# EXPORTS: RepositoryFactory
# DEPENDENCIES: infrastructure.*, config
# PATTERNS: Factory pattern, Dependency Injection
# ENTRY_POINTS: RepositoryFactory.create_known_dates_repository(), create_available_dates_client()
# ============================================================================

"""
Repository Factory - Central Creation Point

Single place where configuration turns into infrastructure objects, so
services receive ready-made collaborators and never read settings
themselves.
"""

from typing import Optional

import httpx

from config.storage_config import StorageConfig
from config.source_config import SourceConfig
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "RepositoryFactory")


class RepositoryFactory:
    """
    Factory for creating repository and client instances.
    """

    @staticmethod
    def create_blob_repository(storage: StorageConfig) -> 'BlobRepository':
        """
        Create blob storage repository.

        Connection string auth wins over DefaultAzureCredential when both
        are configured.
        """
        from .blob import BlobRepository

        logger.info("🏭 Creating Blob Storage repository")
        if storage.uses_connection_string:
            return BlobRepository(connection_string=storage.connection_string)
        return BlobRepository(account_url=storage.account_url)

    @staticmethod
    def create_known_dates_repository(
        storage: StorageConfig,
        blob_repo: Optional['IBlobRepository'] = None
    ) -> 'KnownDatesRepository':
        """
        Create the known-dates repository for the configured blob.

        Args:
            storage: Storage configuration
            blob_repo: Optional pre-built blob repository
        """
        from .known_dates_repository import KnownDatesRepository

        if blob_repo is None:
            blob_repo = RepositoryFactory.create_blob_repository(storage)
        logger.debug(f"Creating KnownDatesRepository for {storage.container_name}/{storage.blob_name}")
        return KnownDatesRepository(blob_repo, storage.container_name, storage.blob_name)

    @staticmethod
    def create_available_dates_client(
        source: SourceConfig,
        transport: Optional[httpx.BaseTransport] = None
    ) -> 'AvailableDatesClient':
        """Create the remote available-dates client."""
        from .available_dates_client import AvailableDatesClient

        logger.debug(f"Creating AvailableDatesClient for {source.url}")
        return AvailableDatesClient(source, transport=transport)
