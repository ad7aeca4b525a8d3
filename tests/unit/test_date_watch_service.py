"""
DateWatchService: full load → fetch → reconcile → persist runs.
"""

from datetime import date

import pytest

from exceptions import FetchError, ParseError, StorageError
from tests.factories.fakes import known_dates_blob

CONTAINER = "date-watch"
BLOB = "known-dates.json"


def _store(blob_repo, *dates):
    blob_repo.blobs[(CONTAINER, BLOB)] = known_dates_blob(*dates)


class TestScenarios:

    def test_scenario_a_first_run(self, blob_repo, make_service, jan_first):
        service, _ = make_service(["3/3/2023"])
        result = service.run(now=jan_first)

        assert result.new_dates == [date(2023, 3, 3)]
        assert result.had_prior_state is False
        assert result.persisted is True
        assert blob_repo.document(CONTAINER, BLOB) == {"knownDates": ["2023-03-03"]}

    def test_scenario_b_nothing_new_leaves_blob_alone(self, blob_repo, make_service, jan_first):
        _store(blob_repo, "2023-03-03")
        service, _ = make_service(["3/3/2023"])
        result = service.run(now=jan_first)

        assert result.new_dates == []
        assert not result.found_new_dates
        assert result.persisted is False
        assert blob_repo.writes == []

    def test_scenario_c_prunes_past_known_date(self, blob_repo, make_service, jan_first):
        _store(blob_repo, "2022-12-01")
        service, _ = make_service(["3/3/2023"])
        result = service.run(now=jan_first)

        assert result.new_dates == [date(2023, 3, 3)]
        assert result.pruned_dates == [date(2022, 12, 1)]
        assert blob_repo.document(CONTAINER, BLOB) == {"knownDates": ["2023-03-03"]}

    def test_scenario_d_malformed_remote_date_keeps_state(self, blob_repo, make_service, jan_first):
        _store(blob_repo, "Fri Mar 03 2023", "2022-12-01")
        before = blob_repo.blobs[(CONTAINER, BLOB)]
        service, _ = make_service(["3/4/2023", "garbage"])

        with pytest.raises(ParseError):
            service.run(now=jan_first)

        assert blob_repo.blobs[(CONTAINER, BLOB)] == before
        assert blob_repo.writes == []


    def test_non_string_remote_date_is_parse_error(self, blob_repo, make_service, jan_first):
        _store(blob_repo, "2023-03-03")
        service, _ = make_service(["3/4/2023", 20230304])

        with pytest.raises(ParseError):
            service.run(now=jan_first)
        assert blob_repo.writes == []


class TestPersistence:

    def test_prune_only_run_is_persisted(self, blob_repo, make_service, jan_first):
        _store(blob_repo, "2022-12-01", "2023-03-03")
        service, _ = make_service(["3/3/2023"])
        result = service.run(now=jan_first)

        assert result.new_dates == []
        assert result.persisted is True
        assert result.known_count == 1
        assert blob_repo.document(CONTAINER, BLOB) == {"knownDates": ["2023-03-03"]}

    def test_zero_remote_dates_without_pruning(self, blob_repo, make_service, jan_first):
        _store(blob_repo, "2023-03-03")
        service, _ = make_service([])
        result = service.run(now=jan_first)

        assert result.observed_count == 0
        assert result.persisted is False
        assert blob_repo.writes == []

    def test_legacy_encodings_rewritten_as_iso(self, blob_repo, make_service, jan_first):
        _store(blob_repo, "Fri Mar 03 2023")
        service, _ = make_service(["3/3/2023", "3/9/2023"])
        service.run(now=jan_first)

        assert blob_repo.document(CONTAINER, BLOB) == {"knownDates": ["2023-03-03", "2023-03-09"]}

    def test_second_run_finds_nothing(self, blob_repo, make_service, jan_first):
        service, _ = make_service(["3/3/2023", "3/9/2023"])
        first = service.run(now=jan_first)
        second = service.run(now=jan_first)

        assert len(first.new_dates) == 2
        assert second.new_dates == []
        assert second.had_prior_state is True
        assert len(blob_repo.writes) == 1


class TestFailures:

    def test_fetch_failure_persists_nothing(self, blob_repo, make_service, jan_first):
        _store(blob_repo, "2022-12-01")
        service, _ = make_service(error=FetchError("HTTP 503"))

        with pytest.raises(FetchError):
            service.run(now=jan_first)
        assert blob_repo.writes == []

    def test_corrupt_state_aborts_before_fetch(self, blob_repo, make_service, jan_first):
        blob_repo.blobs[(CONTAINER, BLOB)] = b"{broken"
        service, client = make_service(["3/3/2023"])

        with pytest.raises(StorageError):
            service.run(now=jan_first)
        assert client.calls == 0


class TestKnownDates:

    def test_returns_persisted_set(self, blob_repo, make_service):
        _store(blob_repo, "2023-03-09", "Fri Mar 03 2023")
        service, client = make_service()
        assert service.known_dates() == {date(2023, 3, 3), date(2023, 3, 9)}
        assert client.calls == 0

    def test_empty_without_blob(self, make_service):
        service, _ = make_service()
        assert service.known_dates() == set()

    def test_errors_propagate(self, blob_repo, make_service):
        blob_repo.blobs[(CONTAINER, BLOB)] = b"{broken"
        service, _ = make_service()
        with pytest.raises(StorageError):
            service.known_dates()
