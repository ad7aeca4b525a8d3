"""
Remote Available-Dates Source Configuration.

Provides configuration for:
    - Endpoint URL of the scheduling API
    - Static request body (businessID, spID)
    - HTTP timeout

Exports:
    SourceConfig: Pydantic source configuration model
"""

import os
from pydantic import BaseModel, Field

from .defaults import SourceDefaults


class SourceConfig(BaseModel):
    """
    Remote available-dates endpoint configuration.

    The request body is static: the same businessID/spID pair is posted
    on every run.
    """

    url: str = Field(
        default=SourceDefaults.URL,
        pattern=r"^https?://",
        description="Endpoint returning {'d': [<date string>, ...]}"
    )

    business_id: str = Field(
        default=SourceDefaults.BUSINESS_ID,
        min_length=1,
        description="Target business identifier (request field 'businessID')"
    )

    sp_id: str = Field(
        default=SourceDefaults.SP_ID,
        description="Service provider identifier, empty for any provider (request field 'spID')"
    )

    timeout_seconds: float = Field(
        default=SourceDefaults.TIMEOUT_SECONDS,
        gt=0,
        le=300,
        description="HTTP timeout for the remote call"
    )

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            url=os.environ.get("AVAILABLE_DATES_URL", SourceDefaults.URL),
            business_id=os.environ.get("AVAILABLE_DATES_BUSINESS_ID", SourceDefaults.BUSINESS_ID),
            sp_id=os.environ.get("AVAILABLE_DATES_SP_ID", SourceDefaults.SP_ID),
            timeout_seconds=float(os.environ.get(
                "AVAILABLE_DATES_TIMEOUT_SECONDS", str(SourceDefaults.TIMEOUT_SECONDS)
            )),
        )
