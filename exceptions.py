# ============================================================================
# CLAUDE CONTEXT - EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by every layer
# PURPOSE: Exception hierarchy separating fatal misconfiguration from run failures
# EXPORTS: BusinessLogicError, FetchError, ParseError, StorageError, ConfigurationError
# DEPENDENCIES: None (standard library only)
# SCOPE: Application-wide exception handling
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Configuration errors (deployment problems, fatal before any I/O)
2. Business Logic Failures (expected runtime issues that abort one run)

Every failure aborts the current run. Nothing is retried in-process; the
next timer tick starts over from the last persisted state.
"""


class BusinessLogicError(Exception):
    """
    Base class for expected runtime failures of a watch run.

    These are normal failures that occur during system operation
    and end the run without persisting anything.
    """
    pass


class FetchError(BusinessLogicError):
    """
    Remote available-dates source failed.

    Examples:
        - Endpoint unreachable or timed out
        - Non-2xx HTTP status
        - Body is not JSON or has no 'd' list
    """
    pass


class ParseError(BusinessLogicError):
    """
    A date value could not be normalized to a calendar date.

    Raised for remote dates and for persisted known dates alike.
    """

    def __init__(self, value, reason: str = "unrecognized date format"):
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot parse date {value!r}: {reason}")


class StorageError(BusinessLogicError):
    """
    Known-dates blob could not be read or written.

    A missing blob is NOT a StorageError - it means no prior state.

    Examples:
        - Authentication failure
        - Container does not exist
        - Stored document is not valid JSON
    """
    pass


class ConfigurationError(Exception):
    """
    System configuration error.

    Fatal: raised while building configuration, before the remote
    source or blob storage is contacted.

    Examples:
        - KNOWN_DATES_CONTAINER not set
        - Neither a connection string nor a storage account configured
        - Unknown WATCH_TIMEZONE
    """
    pass


__all__ = [
    'BusinessLogicError',
    'FetchError',
    'ParseError',
    'StorageError',
    'ConfigurationError',
]
