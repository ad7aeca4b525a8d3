# ============================================================================
# CLAUDE CONTEXT - AVAILABLE DATES API MODELS
# ============================================================================
# STATUS: Core model - Pydantic models for the remote scheduling API
# PURPOSE: Typed request/response bodies for the available-dates endpoint
# EXPORTS: AvailableDatesRequest, AvailableDatesResponse
# DEPENDENCIES: pydantic
# ============================================================================
"""
Available Dates API Models.

The remote scheduling API is an ASP.NET style endpoint: it takes a small
JSON body and wraps its answer in a 'd' field.

Models:
    AvailableDatesRequest - POST body {"businessID": ..., "spID": ...}
    AvailableDatesResponse - Response {"d": [<date string>, ...]}
"""

from typing import Any, Dict, List
from pydantic import BaseModel, Field, ConfigDict


class AvailableDatesRequest(BaseModel):
    """
    Request body for the available-dates endpoint.

    Field names on the wire are camel-cased with an upper-case ID suffix.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    business_id: str = Field(..., alias="businessID", min_length=1,
                             description="Target business identifier")
    sp_id: str = Field(default="", alias="spID",
                       description="Service provider identifier, empty for any")

    def to_body(self) -> Dict[str, Any]:
        """Wire representation."""
        return self.model_dump(by_alias=True)


class AvailableDatesResponse(BaseModel):
    """
    Response from the available-dates endpoint.

    Entries are left as sent (any JSON value); normalization happens in
    core.logic.reconcile so a bad entry surfaces as ParseError.
    """
    model_config = ConfigDict(extra="ignore")

    d: List[Any] = Field(..., description="Available dates, remote-defined format")
