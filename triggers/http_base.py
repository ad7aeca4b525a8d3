"""
HTTP Trigger Base Class.

Shared request handling for the HTTP endpoints: method check, request id,
JSON envelope, and translation of application exceptions into status codes.

Exports:
    BaseHttpTrigger: Base class for HTTP triggers
    ERROR_STATUS: Exception type -> (status code, error label)
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple, Type
import json
import traceback
import uuid

import azure.functions as func

from exceptions import ConfigurationError, FetchError, ParseError, StorageError
from util_logger import LoggerFactory, ComponentType

# First matching entry wins; anything else is a 500
ERROR_STATUS: List[Tuple[Type[Exception], int, str]] = [
    (ValueError, 400, "Bad request"),
    (FetchError, 502, "Bad gateway"),           # remote source failed
    (ParseError, 502, "Bad gateway"),           # a date could not be normalized
    (StorageError, 503, "Storage unavailable"),  # known-dates blob unreachable
    (ConfigurationError, 500, "Configuration error"),
]


class BaseHttpTrigger(ABC):
    """
    Base class for the watch app's HTTP triggers.

    Subclasses return a dict from process_request(); the base wraps it as
    JSON with request_id and timestamp, or maps a raised exception through
    ERROR_STATUS.
    """

    def __init__(self, trigger_name: str):
        self.trigger_name = trigger_name
        self.logger = LoggerFactory.create_logger(ComponentType.TRIGGER, f"http.{trigger_name}")

    @abstractmethod
    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        """Do the work; raise to produce an error response."""

    @abstractmethod
    def get_allowed_methods(self) -> List[str]:
        """HTTP methods this endpoint accepts."""

    def handle_request(self, req: func.HttpRequest) -> func.HttpResponse:
        """Entry point called from function_app.py."""
        request_id = uuid.uuid4().hex[:8]
        self.logger.info(f"🌐 [{self.trigger_name}] {request_id} {req.method} {req.url}")

        allowed = self.get_allowed_methods()
        if req.method not in allowed:
            return self._error(405, "Method not allowed",
                               f"{req.method} not allowed, use {', '.join(allowed)}", request_id)

        try:
            data = self.process_request(req)
        except Exception as e:
            return self._map_exception(e, request_id)

        self.logger.info(f"✅ [{self.trigger_name}] {request_id} done")
        return self._json(200, data, request_id)

    def _map_exception(self, error: Exception, request_id: str) -> func.HttpResponse:
        for error_type, status, label in ERROR_STATUS:
            if isinstance(error, error_type):
                log = self.logger.warning if status < 500 else self.logger.error
                log(f"❌ [{self.trigger_name}] {request_id} {type(error).__name__}: {error}")
                return self._error(status, label, str(error), request_id)

        self.logger.error(f"💥 [{self.trigger_name}] {request_id} unexpected {type(error).__name__}: {error}")
        self.logger.debug(traceback.format_exc())
        return self._error(500, "Internal server error", str(error), request_id,
                           error_type=type(error).__name__)

    def _error(self, status: int, error: str, message: str, request_id: str, **extra) -> func.HttpResponse:
        return self._json(status, {"error": error, "message": message, **extra}, request_id)

    def _json(self, status: int, data: Dict[str, Any], request_id: str) -> func.HttpResponse:
        body = {**data, "request_id": request_id, "timestamp": datetime.now(timezone.utc).isoformat()}
        return func.HttpResponse(
            json.dumps(body, default=str),
            status_code=status,
            mimetype="application/json",
            headers={"X-Request-ID": request_id},
        )


__all__ = ['BaseHttpTrigger', 'ERROR_STATUS']
