# ============================================================================
# CLAUDE CONTEXT - KNOWN DATES REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Persisted known-dates set
# PURPOSE: Load/save the known-dates JSON document in one blob
# EXPORTS: KnownDatesRepository, KnownDatesState
# DEPENDENCIES: azure-core, infrastructure.blob, core.models.known_dates
# ============================================================================
"""
Known Dates Repository.

Reads and overwrites the single blob holding {"knownDates": [...]}.

Absence of the blob, an empty body, a JSON null or a missing 'knownDates'
field all mean "no known dates". Any other failure is a StorageError
(or a ParseError for an entry that is not a date).

Usage:
    repo = RepositoryFactory.create_known_dates_repository(config.storage)
    state = repo.load()
    repo.save(state.dates | {date(2023, 3, 3)})
"""

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, FrozenSet, Iterable

from azure.core.exceptions import AzureError, ResourceNotFoundError
from pydantic import ValidationError

from config.defaults import StorageDefaults
from core.logic.reconcile import normalize_dates
from core.models.known_dates import KnownDatesDocument
from exceptions import StorageError
from util_logger import LoggerFactory, ComponentType
from .blob import IBlobRepository

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "KnownDatesRepository")


@dataclass(frozen=True)
class KnownDatesState:
    """Known dates as loaded; found=False means no prior state existed."""
    dates: FrozenSet[date] = field(default_factory=frozenset)
    found: bool = False


class KnownDatesRepository:
    """
    Repository for the persisted known-dates set.

    The whole set is replaced on every save; there are no partial updates.
    """

    def __init__(self, blob_repo: IBlobRepository, container: str, blob_name: str):
        self.blob_repo = blob_repo
        self.container = container
        self.blob_name = blob_name

    @property
    def location(self) -> str:
        return f"{self.container}/{self.blob_name}"

    def exists(self) -> bool:
        """
        Whether the known-dates blob exists.

        Raises:
            StorageError: Storage unreachable or access denied
        """
        try:
            return self.blob_repo.blob_exists(self.container, self.blob_name)
        except AzureError as e:
            raise StorageError(f"Cannot check {self.location}: {e}") from e

    def read(self) -> bytes:
        """
        Raw blob content, b"" when the blob does not exist.

        Raises:
            StorageError: Any read failure other than not-found
        """
        try:
            return self.blob_repo.read_blob(self.container, self.blob_name)
        except ResourceNotFoundError:
            return b""
        except AzureError as e:
            raise StorageError(f"Cannot read {self.location}: {e}") from e

    def load(self) -> KnownDatesState:
        """
        Load and normalize the known dates.

        Raises:
            StorageError: Read failure or document is not valid JSON
            ParseError: An entry is not a recognizable date
        """
        try:
            raw = self.blob_repo.read_blob(self.container, self.blob_name)
        except ResourceNotFoundError:
            logger.warning(f"No known-dates blob at {self.location} - starting with an empty set")
            return KnownDatesState(found=False)
        except AzureError as e:
            raise StorageError(f"Cannot read {self.location}: {e}") from e

        document = self._decode(raw)
        dates = frozenset(normalize_dates(document.raw_dates))
        logger.debug(f"Loaded {len(dates)} known dates from {self.location}")
        return KnownDatesState(dates=dates, found=True)

    def save(self, dates: Iterable[date]) -> Dict[str, Any]:
        """
        Overwrite the blob with the given set (sorted ISO-8601).

        Raises:
            StorageError: Write failure
        """
        document = KnownDatesDocument.from_dates(dates)
        try:
            result = self.blob_repo.write_blob(
                self.container,
                self.blob_name,
                document.to_json_bytes(),
                content_type=StorageDefaults.CONTENT_TYPE
            )
        except AzureError as e:
            raise StorageError(f"Cannot write {self.location}: {e}") from e

        logger.info(
            f"Persisted {len(document.raw_dates)} known dates to {self.location}: "
            + ", ".join(f'"{d}"' for d in document.raw_dates)
        )
        return result

    def _decode(self, raw: bytes) -> KnownDatesDocument:
        """Empty body and JSON null decode to an empty document."""
        if not raw or not raw.strip():
            return KnownDatesDocument()
        try:
            payload = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(f"{self.location} is not valid JSON: {e}") from e
        if payload is None:
            return KnownDatesDocument()
        try:
            return KnownDatesDocument.model_validate(payload)
        except ValidationError as e:
            raise StorageError(f"{self.location} has an unexpected shape: {e}") from e


__all__ = ['KnownDatesRepository', 'KnownDatesState']
