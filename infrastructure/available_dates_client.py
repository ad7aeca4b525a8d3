# ============================================================================
# CLAUDE CONTEXT - AVAILABLE DATES CLIENT
# ============================================================================
# STATUS: Infrastructure - HTTP client for the remote scheduling API
# PURPOSE: POST the static business/provider body, return raw date strings
# EXPORTS: AvailableDatesClient
# DEPENDENCIES: httpx, config.source_config, core.models.available_dates
# ============================================================================
"""
Available Dates Client.

Handles HTTP communication with the remote scheduling API. One POST per
run, no retries: any failure is a FetchError and the next timer tick tries
again.

Usage:
    from infrastructure.available_dates_client import AvailableDatesClient

    client = AvailableDatesClient(config.source)
    raw_dates = client.fetch_dates()
"""

from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from config.source_config import SourceConfig
from core.models.available_dates import AvailableDatesRequest, AvailableDatesResponse
from exceptions import FetchError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.ADAPTER, "AvailableDatesClient")


class AvailableDatesClient:
    """
    Client for the available-dates endpoint.

    Handles:
    - Building the static request body
    - HTTP POST with timeout
    - Response parsing into AvailableDatesResponse
    """

    def __init__(self, source: SourceConfig, transport: Optional[httpx.BaseTransport] = None):
        """
        Args:
            source: Endpoint and request body settings
            transport: Optional httpx transport (httpx.MockTransport in tests)
        """
        self._source = source
        self._transport = transport
        self._request = AvailableDatesRequest(
            business_id=source.business_id,
            sp_id=source.sp_id
        )

    @property
    def business_id(self) -> str:
        return self._request.business_id

    def fetch_dates(self) -> List[Any]:
        """
        Fetch the currently available dates.

        POST {url} {"businessID": ..., "spID": ...}

        Returns:
            Raw entries in the order the source returned them (normally strings)

        Raises:
            FetchError: Unreachable, non-2xx, non-JSON or missing 'd'
        """
        url = self._source.url
        logger.info(f"Requesting available dates for business {self._request.business_id}: {url}")

        try:
            with httpx.Client(timeout=self._source.timeout_seconds, transport=self._transport) as client:
                response = client.post(url, json=self._request.to_body())
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"Available-dates endpoint returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Available-dates endpoint unreachable: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(f"Available-dates response is not JSON: {e}") from e

        try:
            parsed = AvailableDatesResponse.model_validate(payload)
        except ValidationError as e:
            raise FetchError(f"Available-dates response has no usable 'd' list: {e}") from e

        logger.debug(f"Received {len(parsed.d)} raw dates")
        return parsed.d


__all__ = ['AvailableDatesClient']
