# ============================================================================
# TIMER HANDLER BASE CLASS
# ============================================================================
# STATUS: Trigger layer - Base class for scheduled handlers
# PURPOSE: One 'now' per tick, duration, result logging, failure capture
# ============================================================================
"""
Timer Handler Base Class.

A timer function in function_app.py delegates to handler.handle(timer).
The handler captures the trigger time once, passes it to execute(), and
logs the returned result dict. Exceptions are logged and turned into a
failure dict: a timer has no caller to raise to, and the next tick is the
retry.

Result dict keys read here:
    success (bool), health_status (str), summary (dict of scalars), error (str)

Exports:
    TimerHandlerBase: Abstract base class for timer handlers
"""

import traceback
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict

import azure.functions as func

from util_logger import LoggerFactory, ComponentType


class TimerHandlerBase(ABC):
    """
    Base for timer handlers; subclasses set `name` and implement execute().
    """

    name: str = "Timer"

    # Successful outcomes worth a WARNING line so they stand out in App Insights
    attention_statuses = ("NEW_DATES_FOUND",)

    @property
    def logger(self):
        return LoggerFactory.create_logger(ComponentType.TRIGGER, f"timer.{self.name}")

    def handle(self, timer: func.TimerRequest) -> Dict[str, Any]:
        """Run execute() for one tick and log the outcome; never raises."""
        trigger_time = datetime.now(timezone.utc)
        if timer.past_due:
            self.logger.warning(f"⏰ {self.name}: past due, running now")
        self.logger.info(f"⏰ {self.name}: tick at {trigger_time.isoformat()}")

        try:
            result = self.execute(trigger_time)
        except Exception as e:
            tb = traceback.format_exc()
            self.logger.error(f"❌ {self.name}: aborted by {type(e).__name__}: {e}\n{tb}")
            return {"success": False, "error": str(e), "error_type": type(e).__name__, "traceback": tb}

        result.setdefault(
            "duration_seconds",
            round((datetime.now(timezone.utc) - trigger_time).total_seconds(), 2),
        )
        self._log_result(result)
        return result

    @abstractmethod
    def execute(self, trigger_time: datetime) -> Dict[str, Any]:
        """
        Do the scheduled work.

        Args:
            trigger_time: The single UTC 'now' of this tick
        """

    def _log_result(self, result: Dict[str, Any]) -> None:
        if not result.get("success", False):
            self.logger.error(f"❌ {self.name}: failed - {result.get('error', 'unknown error')}")
            return

        status = result.get("health_status", "OK")
        scalars = {
            k: v for k, v in result.get("summary", {}).items()
            if isinstance(v, (bool, int, float, str))
        }
        line = f"{self.name}: {status} in {result['duration_seconds']}s"
        if scalars:
            line += " | " + ", ".join(f"{k}={v}" for k, v in scalars.items())

        if status in self.attention_statuses:
            self.logger.warning(f"⚠️ {line}")
        else:
            self.logger.info(f"✅ {line}")


__all__ = ['TimerHandlerBase']
