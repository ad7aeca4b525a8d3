"""
Watch Run Result Model.

Outcome of one date-watch run, returned by DateWatchService.run() and
serialized by the manual-run HTTP endpoint.

Exports:
    DateWatchRunResult: Pydantic result model
"""

from datetime import date, datetime
from typing import Any, Dict, List
from pydantic import BaseModel, Field, ConfigDict, field_serializer


class DateWatchRunResult(BaseModel):
    """
    Summary of a completed watch run.

    Fields:
    - run_id: Short correlation id shared by the run's log lines
    - started_at: The single 'now' used for every comparison in the run
    - had_prior_state: False on first run (no blob yet)
    - observed_count: Raw entries returned by the remote source
    - new_dates: Newly found dates, ascending
    - pruned_dates: Known dates dropped because they are in the past
    - known_count: Size of the known set after the run
    - persisted: Whether the blob was rewritten
    """
    model_config = ConfigDict(frozen=True)

    run_id: str
    started_at: datetime
    had_prior_state: bool
    observed_count: int = Field(ge=0)
    new_dates: List[date] = Field(default_factory=list)
    pruned_dates: List[date] = Field(default_factory=list)
    known_count: int = Field(ge=0)
    persisted: bool = False

    @field_serializer('started_at')
    def serialize_started_at(self, value: datetime) -> str:
        return value.isoformat()

    @property
    def found_new_dates(self) -> bool:
        return bool(self.new_dates)

    def to_timer_result(self) -> Dict[str, Any]:
        """Result dict in the shape TimerHandlerBase logs."""
        return {
            "success": True,
            "health_status": "NEW_DATES_FOUND" if self.new_dates else "NO_CHANGES",
            "run_id": self.run_id,
            "new_dates": [d.isoformat() for d in self.new_dates],
            "summary": {
                "observed": self.observed_count,
                "new": len(self.new_dates),
                "pruned": len(self.pruned_dates),
                "known": self.known_count,
                "persisted": self.persisted,
            },
        }
