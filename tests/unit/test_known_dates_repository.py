"""
KnownDatesRepository: tolerant loading, strict failures, save format.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest
from azure.core.exceptions import AzureError, ResourceNotFoundError

from infrastructure.blob import IBlobRepository
from infrastructure.known_dates_repository import KnownDatesRepository
from exceptions import ParseError, StorageError
from tests.factories.fakes import known_dates_blob

CONTAINER = "date-watch"
BLOB = "known-dates.json"


def _store(blob_repo, data: bytes):
    blob_repo.blobs[(CONTAINER, BLOB)] = data


class TestLoad:

    def test_missing_blob_is_no_prior_state(self, known_repo):
        state = known_repo.load()
        assert state.found is False
        assert state.dates == frozenset()

    def test_mixed_encodings_normalized(self, blob_repo, known_repo):
        _store(blob_repo, known_dates_blob("Fri Mar 03 2023", "3/4/2023", "2023-03-05"))
        state = known_repo.load()
        assert state.found is True
        assert state.dates == {date(2023, 3, 3), date(2023, 3, 4), date(2023, 3, 5)}

    @pytest.mark.parametrize("body", [b"", b"   ", b"null", b"{}", b'{"knownDates": null}'])
    def test_empty_documents_mean_no_dates(self, blob_repo, known_repo, body):
        _store(blob_repo, body)
        state = known_repo.load()
        assert state.found is True
        assert state.dates == frozenset()

    def test_comma_joined_legacy_entries(self, blob_repo, known_repo):
        _store(blob_repo, known_dates_blob("Mar 03,2023", "Mar 09,2023"))
        assert known_repo.load().dates == {date(2023, 3, 3), date(2023, 3, 9)}

    def test_null_and_blank_entries_skipped(self, blob_repo, known_repo):
        _store(blob_repo, b'{"knownDates": ["2023-03-03", null, ""]}')
        assert known_repo.load().dates == {date(2023, 3, 3)}

    def test_unparseable_entry_raises(self, blob_repo, known_repo):
        _store(blob_repo, known_dates_blob("2023-03-03", "someday"))
        with pytest.raises(ParseError):
            known_repo.load()

    @pytest.mark.parametrize("body", [b"{not json", b"\xff\xfe", b'["2023-03-03"]', b'{"knownDates": "2023-03-03"}'])
    def test_corrupt_document_is_storage_error(self, blob_repo, known_repo, body):
        _store(blob_repo, body)
        with pytest.raises(StorageError):
            known_repo.load()

    def test_storage_failure_on_exists(self):
        blob_repo = MagicMock(spec=IBlobRepository)
        blob_repo.blob_exists.side_effect = AzureError("auth failed")
        repo = KnownDatesRepository(blob_repo, CONTAINER, BLOB)
        with pytest.raises(StorageError, match="date-watch/known-dates.json"):
            repo.exists()

    def test_storage_failure_on_read(self):
        blob_repo = MagicMock(spec=IBlobRepository)
        blob_repo.read_blob.side_effect = AzureError("connection reset")
        repo = KnownDatesRepository(blob_repo, CONTAINER, BLOB)
        with pytest.raises(StorageError, match="date-watch/known-dates.json"):
            repo.load()

    def test_not_found_on_read_is_no_prior_state(self):
        blob_repo = MagicMock(spec=IBlobRepository)
        blob_repo.blob_exists.return_value = True
        blob_repo.read_blob.side_effect = ResourceNotFoundError("gone")
        repo = KnownDatesRepository(blob_repo, CONTAINER, BLOB)

        state = repo.load()

        assert state.found is False
        assert state.dates == frozenset()
        blob_repo.blob_exists.assert_not_called()

    def test_read_returns_empty_when_missing(self):
        blob_repo = MagicMock(spec=IBlobRepository)
        blob_repo.read_blob.side_effect = ResourceNotFoundError("gone")
        repo = KnownDatesRepository(blob_repo, CONTAINER, BLOB)
        assert repo.read() == b""


class TestSave:

    def test_writes_sorted_iso_json(self, blob_repo, known_repo):
        known_repo.save({date(2023, 3, 9), date(2023, 3, 3)})
        container, blob_path, data, content_type = blob_repo.writes[-1]
        assert (container, blob_path) == (CONTAINER, BLOB)
        assert content_type == "application/json"
        assert blob_repo.document(CONTAINER, BLOB) == {"knownDates": ["2023-03-03", "2023-03-09"]}

    def test_save_then_load(self, known_repo):
        known_repo.save({date(2023, 3, 3)})
        assert known_repo.load().dates == {date(2023, 3, 3)}

    def test_write_failure_is_storage_error(self):
        blob_repo = MagicMock(spec=IBlobRepository)
        blob_repo.write_blob.side_effect = AzureError("forbidden")
        repo = KnownDatesRepository(blob_repo, CONTAINER, BLOB)
        with pytest.raises(StorageError, match="Cannot write"):
            repo.save({date(2023, 3, 3)})
