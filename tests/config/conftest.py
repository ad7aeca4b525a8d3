"""
Config test fixtures - clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "KNOWN_DATES_STORAGE_CONNECTION", "KNOWN_DATES_STORAGE_ACCOUNT",
        "KNOWN_DATES_CONTAINER", "KNOWN_DATES_BLOB", "AzureWebJobsStorage",
        "AVAILABLE_DATES_URL", "AVAILABLE_DATES_BUSINESS_ID",
        "AVAILABLE_DATES_SP_ID", "AVAILABLE_DATES_TIMEOUT_SECONDS",
        "WATCH_SCHEDULE", "WATCH_TIMEZONE", "DEBUG_LOGGING",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def minimal_env(clean_env):
    """Only the required variables, with a connection string."""
    clean_env.setenv("KNOWN_DATES_CONTAINER", "date-watch")
    clean_env.setenv("KNOWN_DATES_BLOB", "known-dates.json")
    clean_env.setenv(
        "KNOWN_DATES_STORAGE_CONNECTION",
        "DefaultEndpointsProtocol=https;AccountName=teststore;AccountKey=dGVzdGtleQ==",
    )
    return clean_env
