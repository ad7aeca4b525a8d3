"""
BlobRepository over a mocked BlobServiceClient, and RepositoryFactory wiring.
"""

from unittest.mock import MagicMock

import pytest
from azure.core.exceptions import ResourceNotFoundError, HttpResponseError

from config.storage_config import StorageConfig
from config.source_config import SourceConfig
from infrastructure import RepositoryFactory, BlobRepository, KnownDatesRepository, AvailableDatesClient


@pytest.fixture
def blob_service():
    return MagicMock()


@pytest.fixture
def blob_client(blob_service):
    return blob_service.get_container_client.return_value.get_blob_client.return_value


@pytest.fixture
def repo(blob_service):
    return BlobRepository(blob_service=blob_service)


class TestBlobRepository:

    def test_requires_some_credentials(self):
        with pytest.raises(ValueError):
            BlobRepository()

    def test_exists(self, repo, blob_client):
        blob_client.exists.return_value = True
        assert repo.blob_exists("date-watch", "known-dates.json") is True

    def test_missing_container_is_missing_blob(self, repo, blob_client):
        blob_client.exists.side_effect = ResourceNotFoundError("no container")
        assert repo.blob_exists("date-watch", "known-dates.json") is False

    def test_exists_other_errors_propagate(self, repo, blob_client):
        blob_client.exists.side_effect = HttpResponseError("forbidden")
        with pytest.raises(HttpResponseError):
            repo.blob_exists("date-watch", "known-dates.json")

    def test_read(self, repo, blob_client):
        blob_client.download_blob.return_value.readall.return_value = b'{"knownDates": []}'
        assert repo.read_blob("date-watch", "known-dates.json") == b'{"knownDates": []}'

    def test_read_not_found_propagates(self, repo, blob_client):
        blob_client.download_blob.side_effect = ResourceNotFoundError("gone")
        with pytest.raises(ResourceNotFoundError):
            repo.read_blob("date-watch", "known-dates.json")

    def test_write_overwrites_with_content_type(self, repo, blob_client):
        blob_client.upload_blob.return_value = {"etag": '"0x8D"', "last_modified": None}
        result = repo.write_blob("date-watch", "known-dates.json", b"{}", content_type="application/json")

        args, kwargs = blob_client.upload_blob.call_args
        assert args == (b"{}",)
        assert kwargs["overwrite"] is True
        assert kwargs["content_settings"].content_type == "application/json"
        assert result["size"] == 2
        assert result["etag"] == '"0x8D"'

    def test_container_client_cached(self, repo, blob_service, blob_client):
        blob_client.exists.return_value = True
        repo.blob_exists("date-watch", "a.json")
        repo.blob_exists("date-watch", "b.json")
        assert blob_service.get_container_client.call_count == 1


class TestRepositoryFactory:

    storage = StorageConfig(
        connection_string="DefaultEndpointsProtocol=https;AccountName=teststore;AccountKey=dGVzdGtleQ==",
        container_name="date-watch",
        blob_name="known-dates.json",
    )

    def test_blob_repository_from_connection_string(self):
        repo = RepositoryFactory.create_blob_repository(self.storage)
        assert isinstance(repo, BlobRepository)
        assert repo.blob_service.account_name == "teststore"

    def test_known_dates_repository_uses_configured_location(self):
        repo = RepositoryFactory.create_known_dates_repository(self.storage, blob_repo=MagicMock())
        assert isinstance(repo, KnownDatesRepository)
        assert repo.location == "date-watch/known-dates.json"

    def test_available_dates_client(self):
        client = RepositoryFactory.create_available_dates_client(SourceConfig(business_id="9"))
        assert isinstance(client, AvailableDatesClient)
        assert client.business_id == "9"
