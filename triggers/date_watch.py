"""
Date Watch Timer Trigger.

Runs one watch cycle per timer tick: load known dates, fetch available
dates, report new ones, persist the updated set.

Exports:
    DateWatchTimerHandler: Timer handler class
    date_watch_handler: Module-level instance used by function_app.py
"""

from datetime import datetime
from typing import Any, Callable, Dict, Optional

from services import DateWatchService, build_date_watch_service
from .timer_base import TimerHandlerBase


class DateWatchTimerHandler(TimerHandlerBase):
    """
    Timer handler for the scheduled date watch.

    The service is built on first use so a missing setting surfaces as a
    logged ConfigurationError for that run, before any I/O.
    """

    name = "DateWatch"

    def __init__(self, service_factory: Callable[[], DateWatchService] = build_date_watch_service):
        super().__init__()
        self._service_factory = service_factory
        self._service: Optional[DateWatchService] = None

    @property
    def service(self) -> DateWatchService:
        if self._service is None:
            self._service = self._service_factory()
        return self._service

    def execute(self, trigger_time: datetime) -> Dict[str, Any]:
        result = self.service.run(now=trigger_time, invocation="timer")
        return result.to_timer_result()


date_watch_handler = DateWatchTimerHandler()

__all__ = ['DateWatchTimerHandler', 'date_watch_handler']
