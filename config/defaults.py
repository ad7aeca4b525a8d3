"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - StorageDefaults: Known-dates blob settings (container/blob have NO default)
    - SourceDefaults: Remote available-dates endpoint and request body
    - WatchDefaults: Schedule, timezone and logging

Required Environment Variables (will fail if not set):
    KNOWN_DATES_CONTAINER - Blob container holding the known-dates document
    KNOWN_DATES_BLOB - Blob name of the known-dates document
    KNOWN_DATES_STORAGE_CONNECTION or KNOWN_DATES_STORAGE_ACCOUNT
        (AzureWebJobsStorage is used when neither is set)

Usage:
    from config.defaults import SourceDefaults

    timeout: float = Field(default=SourceDefaults.TIMEOUT_SECONDS, ...)
"""


# =============================================================================
# STORAGE DEFAULTS
# =============================================================================

class StorageDefaults:
    """
    Known-dates storage reference values.

    Container and blob names are deployment specific and REQUIRE explicit
    environment variables. Only the Functions runtime fallback lives here.
    """

    # Functions host storage, used when no dedicated connection is configured
    FUNCTIONS_RUNTIME_CONNECTION_VAR = "AzureWebJobsStorage"

    # Persisted document content type
    CONTENT_TYPE = "application/json"


# =============================================================================
# REMOTE SOURCE DEFAULTS
# =============================================================================

class SourceDefaults:
    """Remote available-dates endpoint settings."""

    URL = "https://www.vagaro.com/us02/websiteapi/homepage/getavailabledates"
    BUSINESS_ID = "213133"
    SP_ID = ""
    TIMEOUT_SECONDS = 30.0


# =============================================================================
# WATCH DEFAULTS
# =============================================================================

class WatchDefaults:
    """Schedule, calendar and logging defaults."""

    # NCRONTAB (six fields, seconds first): top of every hour
    SCHEDULE = "0 0 * * * *"
    TIMEZONE = "UTC"
    DEBUG_LOGGING = False


__all__ = [
    'StorageDefaults',
    'SourceDefaults',
    'WatchDefaults',
]
