"""
Core Models.

Exports:
    AvailableDatesRequest, AvailableDatesResponse: Remote API bodies
    KnownDatesDocument: Persisted known-dates payload
    DateWatchRunResult: Outcome of one watch run
"""

from .available_dates import AvailableDatesRequest, AvailableDatesResponse
from .known_dates import KnownDatesDocument
from .watch_run import DateWatchRunResult

__all__ = [
    'AvailableDatesRequest',
    'AvailableDatesResponse',
    'KnownDatesDocument',
    'DateWatchRunResult',
]
