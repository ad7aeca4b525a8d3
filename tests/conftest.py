"""
Root conftest.py - sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without Azure Storage or the remote scheduling API.
"""

import os
import sys
from datetime import datetime, timezone

import pytest

# Add project root to sys.path so 'core', 'config', 'infrastructure', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

TEST_CONNECTION_STRING = (
    "DefaultEndpointsProtocol=https;AccountName=teststore;"
    "AccountKey=dGVzdGtleQ==;EndpointSuffix=core.windows.net"
)


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set minimal environment variables so configuration can be built.

    No test talks to real storage; the connection string only has to parse.
    """
    defaults = {
        "KNOWN_DATES_CONTAINER": "date-watch",
        "KNOWN_DATES_BLOB": "known-dates.json",
        "KNOWN_DATES_STORAGE_CONNECTION": TEST_CONNECTION_STRING,
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture(autouse=True)
def fresh_config():
    """Drop the config singleton around every test."""
    from config import reset_config
    reset_config()
    yield
    reset_config()


@pytest.fixture
def jan_first():
    """The 'now' of the reference scenarios: Jan 1 2023, noon UTC."""
    return datetime(2023, 1, 1, 12, 0, tzinfo=timezone.utc)
