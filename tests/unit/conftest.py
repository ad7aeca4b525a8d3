"""
Unit test fixtures - in-memory blob store and remote source.
"""

import pytest

from infrastructure.known_dates_repository import KnownDatesRepository
from services.date_watch_service import DateWatchService
from tests.factories.fakes import FakeBlobRepository, FakeDatesClient

CONTAINER = "date-watch"
BLOB = "known-dates.json"


@pytest.fixture
def blob_repo():
    """Empty in-memory blob store."""
    return FakeBlobRepository()


@pytest.fixture
def known_repo(blob_repo):
    """KnownDatesRepository over the in-memory store."""
    return KnownDatesRepository(blob_repo, CONTAINER, BLOB)


@pytest.fixture
def make_service(known_repo):
    """Factory fixture: DateWatchService returning the given remote dates."""
    def _make(dates=None, error=None):
        client = FakeDatesClient(dates=dates, error=error)
        return DateWatchService(known_dates_repo=known_repo, dates_client=client), client
    return _make
