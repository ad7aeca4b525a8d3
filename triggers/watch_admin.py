"""
Date Watch HTTP Triggers.

Manual operations alongside the timer:

    POST /api/watch/run           - Run one watch cycle now
    GET  /api/watch/known-dates   - List the persisted known dates

Exports:
    WatchRunTrigger, KnownDatesTrigger: Trigger classes
    watch_run_trigger, known_dates_trigger: Instances used by function_app.py
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import azure.functions as func

from services import DateWatchService, build_date_watch_service
from .http_base import BaseHttpTrigger


class _ServiceBackedTrigger(BaseHttpTrigger):
    """HTTP trigger holding a lazily built DateWatchService."""

    def __init__(self, trigger_name: str,
                 service_factory: Callable[[], DateWatchService] = build_date_watch_service):
        super().__init__(trigger_name)
        self._service_factory = service_factory
        self._service: Optional[DateWatchService] = None

    @property
    def service(self) -> DateWatchService:
        if self._service is None:
            self._service = self._service_factory()
        return self._service


class WatchRunTrigger(_ServiceBackedTrigger):
    """Run a watch cycle on demand (same semantics as the timer)."""

    def __init__(self, service_factory: Callable[[], DateWatchService] = build_date_watch_service):
        super().__init__("watch_run", service_factory)

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        result = self.service.run(now=datetime.now(timezone.utc), invocation="http")
        return {
            "found_new_dates": result.found_new_dates,
            **result.model_dump(mode="json"),
        }


class KnownDatesTrigger(_ServiceBackedTrigger):
    """Read-only view of the persisted known dates."""

    def __init__(self, service_factory: Callable[[], DateWatchService] = build_date_watch_service):
        super().__init__("known_dates", service_factory)

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        dates = sorted(self.service.known_dates())
        return {
            "count": len(dates),
            "known_dates": [d.isoformat() for d in dates],
        }


watch_run_trigger = WatchRunTrigger()
known_dates_trigger = KnownDatesTrigger()

__all__ = [
    'WatchRunTrigger',
    'KnownDatesTrigger',
    'watch_run_trigger',
    'known_dates_trigger',
]
