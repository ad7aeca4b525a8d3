"""
Known Dates Document Model.

Persisted shape of the known-dates blob:

    {"knownDates": ["2023-03-03", "2023-03-04"]}

Documents written by earlier versions hold other encodings
(e.g. "Fri Mar 03 2023"); they are read as-is and normalized later.

Exports:
    KnownDatesDocument: Pydantic model of the blob payload
"""

import json
from datetime import date
from typing import Iterable, List, Optional
from pydantic import BaseModel, Field, ConfigDict


class KnownDatesDocument(BaseModel):
    """
    Known-dates blob payload.

    A missing or null 'knownDates' field means no known dates.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    known_dates: Optional[List[Optional[str]]] = Field(
        default=None,
        alias="knownDates",
        description="Date strings; ISO-8601 when written by this app"
    )

    @property
    def raw_dates(self) -> List[str]:
        """Non-empty entries (null and blank entries are skipped)."""
        return [d for d in (self.known_dates or []) if d and d.strip()]

    @classmethod
    def from_dates(cls, dates: Iterable[date]) -> 'KnownDatesDocument':
        """Build a document with sorted ISO-8601 entries."""
        return cls(known_dates=[d.isoformat() for d in sorted(set(dates))])

    def to_json_bytes(self) -> bytes:
        return json.dumps(self.model_dump(by_alias=True)).encode("utf-8")
