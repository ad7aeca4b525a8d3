# ============================================================================
# CLAUDE CONTEXT - BLOB REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Blob Storage repository
# PURPOSE: Byte-level blob access with connection string or managed identity
# EXPORTS: IBlobRepository, BlobRepository
# INTERFACES: IBlobRepository for dependency injection
# PYDANTIC_MODELS: None - operates on raw bytes
# DEPENDENCIES: azure-storage-blob, azure-identity, azure-core
# SCOPE: All blob operations of the watch app
# PATTERNS: Repository, DefaultAzureCredential, container client caching
# ENTRY_POINTS: RepositoryFactory.create_blob_repository()
# ============================================================================

"""
Blob Storage Repository

Authentication:
1. Connection string (KNOWN_DATES_STORAGE_CONNECTION / AzureWebJobsStorage)
2. DefaultAzureCredential against https://<account>.blob.core.windows.net
   (Managed Identity in Azure, Azure CLI locally)

Azure SDK errors are logged and re-raised unchanged; callers decide what
a missing blob means.

Usage:
    from infrastructure import RepositoryFactory

    blob_repo = RepositoryFactory.create_blob_repository(config.storage)
    data = blob_repo.read_blob('date-watch', 'known-dates.json')
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings
from azure.core.exceptions import ResourceNotFoundError

from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "BlobRepository")


# ============================================================================
# BLOB REPOSITORY INTERFACE
# ============================================================================

class IBlobRepository(ABC):
    """
    Interface for blob storage operations.

    Enables dependency injection and testing/mocking of blob operations.
    """

    @abstractmethod
    def blob_exists(self, container: str, blob_path: str) -> bool:
        """Check if blob exists"""
        pass

    @abstractmethod
    def read_blob(self, container: str, blob_path: str) -> bytes:
        """Read entire blob to memory"""
        pass

    @abstractmethod
    def write_blob(self, container: str, blob_path: str, data: bytes,
                   content_type: str = "application/octet-stream") -> Dict[str, Any]:
        """Write (overwrite) a blob"""
        pass


# ============================================================================
# BLOB REPOSITORY IMPLEMENTATION
# ============================================================================

class BlobRepository(IBlobRepository):
    """
    Azure Blob Storage repository.

    Usage:
        blob_repo = BlobRepository(connection_string="...")
        blob_repo = BlobRepository(account_url="https://acct.blob.core.windows.net")
        blob_repo = BlobRepository(blob_service=existing_client)
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        account_url: Optional[str] = None,
        blob_service: Optional[BlobServiceClient] = None
    ):
        """
        Initialize the service client.

        Args:
            connection_string: Storage connection string (preferred when set)
            account_url: Account URL for DefaultAzureCredential auth
            blob_service: Pre-built client (tests, custom pipelines)

        Raises:
            ValueError: No way to build a client
        """
        if blob_service is not None:
            self.blob_service = blob_service
        elif connection_string:
            logger.info("Initializing BlobRepository with connection string")
            self.blob_service = BlobServiceClient.from_connection_string(connection_string)
        elif account_url:
            from azure.identity import DefaultAzureCredential
            logger.info(f"Initializing BlobRepository with DefaultAzureCredential for {account_url}")
            self.blob_service = BlobServiceClient(
                account_url=account_url,
                credential=DefaultAzureCredential()
            )
        else:
            raise ValueError("BlobRepository needs a connection string, account URL or client")

        self._container_clients: Dict[str, ContainerClient] = {}

    def _get_container_client(self, container: str) -> ContainerClient:
        """Get or create cached container client."""
        if container not in self._container_clients:
            self._container_clients[container] = self.blob_service.get_container_client(container)
            logger.debug(f"Created new container client for: {container}")
        return self._container_clients[container]

    # ========================================================================
    # CORE BLOB OPERATIONS
    # ========================================================================

    def blob_exists(self, container: str, blob_path: str) -> bool:
        """
        Check if blob exists.

        A missing container counts as a missing blob.
        """
        try:
            blob_client = self._get_container_client(container).get_blob_client(blob_path)
            return blob_client.exists()
        except ResourceNotFoundError:
            return False
        except Exception as e:
            logger.error(f"Error checking blob existence {container}/{blob_path}: {e}")
            raise

    def read_blob(self, container: str, blob_path: str) -> bytes:
        """
        Read entire blob to memory.

        Raises:
            ResourceNotFoundError: If blob doesn't exist
        """
        try:
            logger.debug(f"Reading blob: {container}/{blob_path}")
            blob_client = self._get_container_client(container).get_blob_client(blob_path)
            data = blob_client.download_blob().readall()
            logger.debug(f"Successfully read {len(data)} bytes from {container}/{blob_path}")
            return data
        except ResourceNotFoundError:
            logger.warning(f"Blob not found: {container}/{blob_path}")
            raise
        except Exception as e:
            logger.error(f"Failed to read blob {container}/{blob_path}: {e}")
            raise

    def write_blob(self, container: str, blob_path: str, data: bytes,
                   content_type: str = "application/octet-stream") -> Dict[str, Any]:
        """
        Write a blob, replacing any existing content.

        Returns:
            Dict with container, blob_path, size, etag, last_modified
        """
        try:
            logger.debug(f"Writing blob: {container}/{blob_path} ({len(data)} bytes)")
            blob_client = self._get_container_client(container).get_blob_client(blob_path)
            result = blob_client.upload_blob(
                data,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type)
            )
            logger.info(f"✅ Wrote blob: {container}/{blob_path} ({len(data)} bytes)")
            return {
                'container': container,
                'blob_path': blob_path,
                'size': len(data),
                'etag': result.get('etag') if result else None,
                'last_modified': result.get('last_modified') if result else None,
            }
        except Exception as e:
            logger.error(f"Failed to write blob {container}/{blob_path}: {e}")
            raise


__all__ = ['IBlobRepository', 'BlobRepository']
