# ============================================================================
# CLAUDE CONTEXT - STORAGE CONFIGURATION
# ============================================================================
# STATUS: Configuration - Known-dates blob location and credentials
# PURPOSE: Where the persisted known-dates document lives and how to reach it
# EXPORTS: StorageConfig
# INTERFACES: Pydantic BaseModel
# DEPENDENCIES: pydantic, os
# SOURCE: KNOWN_DATES_STORAGE_CONNECTION, KNOWN_DATES_STORAGE_ACCOUNT,
#         KNOWN_DATES_CONTAINER, KNOWN_DATES_BLOB, AzureWebJobsStorage
# ============================================================================

"""
Azure Storage Configuration - Known-Dates Blob

Two ways to authenticate:
- Connection string (KNOWN_DATES_STORAGE_CONNECTION, falling back to the
  Functions runtime AzureWebJobsStorage setting)
- Storage account name (KNOWN_DATES_STORAGE_ACCOUNT) with DefaultAzureCredential

A connection string wins when both are present.
"""

import os
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from exceptions import ConfigurationError
from .defaults import StorageDefaults


class StorageConfig(BaseModel):
    """
    Known-dates blob storage configuration.

    Attributes:
        connection_string: Blob connection string (masked in repr)
        account_name: Storage account for managed identity auth
        container_name: Container holding the document
        blob_name: Name of the known-dates JSON document
    """

    connection_string: Optional[str] = Field(
        default=None,
        repr=False,
        description="Azure Storage connection string"
    )

    account_name: Optional[str] = Field(
        default=None,
        description="Storage account name (DefaultAzureCredential auth)"
    )

    container_name: str = Field(
        ...,
        min_length=3,
        max_length=63,
        description="Blob container holding the known-dates document"
    )

    blob_name: str = Field(
        ...,
        min_length=1,
        max_length=1024,
        description="Blob name of the known-dates document",
        examples=["known-dates.json"]
    )

    @field_validator('container_name')
    @classmethod
    def validate_container_name(cls, v: str) -> str:
        """Azure container names are lowercase letters, digits and hyphens."""
        if v != v.lower() or not all(c.isalnum() or c == '-' for c in v):
            raise ValueError(
                f"Invalid container name '{v}': use lowercase letters, digits and hyphens"
            )
        return v

    @property
    def uses_connection_string(self) -> bool:
        return bool(self.connection_string)

    @property
    def account_url(self) -> Optional[str]:
        if not self.account_name:
            return None
        return f"https://{self.account_name}.blob.core.windows.net"

    def debug_dict(self) -> dict:
        """Configuration summary safe for logs and health output."""
        return {
            'auth': 'connection_string' if self.uses_connection_string else 'default_credential',
            'connection_string': '***MASKED***' if self.connection_string else None,
            'account_name': self.account_name,
            'container_name': self.container_name,
            'blob_name': self.blob_name,
        }

    @classmethod
    def from_environment(cls) -> 'StorageConfig':
        """
        Load from environment variables.

        Raises:
            ConfigurationError: Container/blob missing, or no way to authenticate
        """
        connection_string = (
            os.environ.get("KNOWN_DATES_STORAGE_CONNECTION")
            or os.environ.get(StorageDefaults.FUNCTIONS_RUNTIME_CONNECTION_VAR)
        )
        account_name = os.environ.get("KNOWN_DATES_STORAGE_ACCOUNT")
        container_name = os.environ.get("KNOWN_DATES_CONTAINER")
        blob_name = os.environ.get("KNOWN_DATES_BLOB")

        missing = []
        if not container_name:
            missing.append("KNOWN_DATES_CONTAINER")
        if not blob_name:
            missing.append("KNOWN_DATES_BLOB")
        if not connection_string and not account_name:
            missing.append("KNOWN_DATES_STORAGE_CONNECTION (or KNOWN_DATES_STORAGE_ACCOUNT)")
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        return cls(
            connection_string=connection_string or None,
            account_name=account_name or None,
            container_name=container_name,
            blob_name=blob_name,
        )
