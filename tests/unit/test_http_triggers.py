"""
HTTP triggers: manual run, known dates, health, and error status mapping.
"""

import json
from unittest.mock import MagicMock

import azure.functions as func
import pytest

from exceptions import ConfigurationError, FetchError, ParseError, StorageError
from services.date_watch_service import DateWatchService
from triggers.health import HealthCheckTrigger
from triggers.watch_admin import WatchRunTrigger, KnownDatesTrigger
from tests.factories.fakes import FakeDatesClient, known_dates_blob


def make_request(method="GET", url="/api/health", params=None):
    return func.HttpRequest(method=method, url=url, params=params or {}, body=b"")


def body_of(response: func.HttpResponse) -> dict:
    return json.loads(response.get_body())


class TestWatchRunTrigger:

    def test_run_reports_new_dates(self, known_repo):
        service = DateWatchService(known_repo, FakeDatesClient(["12/31/2099"]))
        trigger = WatchRunTrigger(service_factory=lambda: service)

        response = trigger.handle_request(make_request("POST", "/api/watch/run"))
        body = body_of(response)

        assert response.status_code == 200
        assert body["found_new_dates"] is True
        assert body["new_dates"] == ["2099-12-31"]
        assert body["persisted"] is True
        assert "request_id" in body
        assert response.headers["X-Request-ID"] == body["request_id"]

    def test_get_not_allowed(self):
        trigger = WatchRunTrigger(service_factory=MagicMock())
        response = trigger.handle_request(make_request("GET", "/api/watch/run"))
        assert response.status_code == 405

    @pytest.mark.parametrize("error, status", [
        (FetchError("Available-dates endpoint returned HTTP 500"), 502),
        (ParseError("the 5th"), 502),
        (StorageError("Cannot read date-watch/known-dates.json"), 503),
        (ValueError("bad input"), 400),
        (RuntimeError("unexpected"), 500),
    ])
    def test_error_mapping(self, error, status):
        service = MagicMock()
        service.run.side_effect = error
        trigger = WatchRunTrigger(service_factory=lambda: service)

        response = trigger.handle_request(make_request("POST", "/api/watch/run"))

        assert response.status_code == status
        assert body_of(response)["message"] == str(error)

    def test_configuration_error_is_500(self):
        def broken_factory():
            raise ConfigurationError("Missing required environment variables: KNOWN_DATES_CONTAINER")

        trigger = WatchRunTrigger(service_factory=broken_factory)
        response = trigger.handle_request(make_request("POST", "/api/watch/run"))

        assert response.status_code == 500
        assert body_of(response)["error"] == "Configuration error"


class TestKnownDatesTrigger:

    def test_lists_sorted_iso_dates(self, blob_repo, known_repo):
        blob_repo.blobs[("date-watch", "known-dates.json")] = known_dates_blob("3/9/2023", "Fri Mar 03 2023")
        service = DateWatchService(known_repo, FakeDatesClient())
        trigger = KnownDatesTrigger(service_factory=lambda: service)

        response = trigger.handle_request(make_request("GET", "/api/watch/known-dates"))
        body = body_of(response)

        assert response.status_code == 200
        assert body["count"] == 2
        assert body["known_dates"] == ["2023-03-03", "2023-03-09"]

    def test_post_not_allowed(self):
        trigger = KnownDatesTrigger(service_factory=MagicMock())
        response = trigger.handle_request(make_request("POST", "/api/watch/known-dates"))
        assert response.status_code == 405


class TestHealthCheckTrigger:

    def test_healthy_with_valid_environment(self):
        response = HealthCheckTrigger().handle_request(make_request())
        body = body_of(response)

        assert response.status_code == 200
        assert body["status"] == "healthy"
        assert body["components"]["configuration"]["details"]["storage"]["connection_string"] == "***MASKED***"
        assert "known_dates_blob" not in body["components"]

    def test_unhealthy_without_required_settings(self, monkeypatch):
        monkeypatch.delenv("KNOWN_DATES_CONTAINER")
        response = HealthCheckTrigger().handle_request(make_request())
        body = body_of(response)

        assert response.status_code == 200
        assert body["status"] == "unhealthy"
        assert body["components"]["configuration"]["status"] == "unhealthy"
        assert body["components"]["environment_variables"]["status"] == "unhealthy"

    def test_deep_check_reports_blob(self, monkeypatch):
        repo = MagicMock()
        repo.exists.return_value = False
        repo.location = "date-watch/known-dates.json"
        monkeypatch.setattr(
            "triggers.health.RepositoryFactory.create_known_dates_repository",
            lambda storage: repo,
        )

        body = body_of(HealthCheckTrigger().handle_request(make_request(params={"deep": "true"})))

        assert body["status"] == "healthy"
        assert body["components"]["known_dates_blob"] == {
            "status": "healthy", "exists": False, "location": "date-watch/known-dates.json",
        }

    def test_deep_check_storage_failure(self, monkeypatch):
        repo = MagicMock()
        repo.exists.side_effect = StorageError("Cannot check date-watch/known-dates.json: denied")
        monkeypatch.setattr(
            "triggers.health.RepositoryFactory.create_known_dates_repository",
            lambda storage: repo,
        )

        body = body_of(HealthCheckTrigger().handle_request(make_request(params={"deep": "true"})))

        assert body["status"] == "unhealthy"
        assert body["components"]["known_dates_blob"]["status"] == "unhealthy"
