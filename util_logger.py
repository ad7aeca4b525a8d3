"""
Structured JSON logging for the watch app.

Every logger is named "<layer>.<component>" and writes one JSON object per
line to stdout. Application Insights lifts the 'customDimensions' object
into queryable columns, so run correlation (run_id, invocation,
business_id) travels there rather than in the message text.

Exports:
    ComponentType: Application layer a logger belongs to
    LogContext: Run correlation fields
    JSONFormatter: Record -> JSON line
    LoggerFactory: Builds configured loggers
    log_exceptions: Decorator that logs an exception and re-raises it
"""

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from enum import Enum
from functools import wraps
from typing import Any, Dict, Optional
import json
import logging
import os
import sys


class ComponentType(Enum):
    """Layer of the application emitting a log line."""
    TRIGGER = "trigger"        # Timer and HTTP entry points
    SERVICE = "service"        # Watch run orchestration
    CORE = "core"              # Pure reconciliation logic
    REPOSITORY = "repository"  # Blob storage access
    ADAPTER = "adapter"        # Remote available-dates source
    VALIDATOR = "validator"    # Startup environment checks


@dataclass
class LogContext:
    """Correlation fields shared by all lines of one watch run."""
    run_id: Optional[str] = None
    invocation: Optional[str] = None   # "timer" or "http"
    business_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, in the shape Application Insights parses."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'location': f"{record.module}.{record.funcName}:{record.lineno}",
        }

        dimensions = getattr(record, 'custom_dimensions', None)
        if dimensions:
            payload['customDimensions'] = dimensions

        if record.exc_info and record.exc_info[0] is not None:
            payload['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info),
            }

        return json.dumps(payload, default=str)


class _DimensionsFilter(logging.Filter):
    """Merges the logger's dimensions under any per-call custom_dimensions."""

    def __init__(self):
        super().__init__()
        self.dimensions: Dict[str, Any] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        merged = dict(self.dimensions)
        merged.update(getattr(record, 'custom_dimensions', None) or {})
        record.custom_dimensions = merged
        return True


class LoggerFactory:
    """
    Builds loggers for application components.

    Example:
        logger = LoggerFactory.create_logger(ComponentType.SERVICE, "DateWatchService")
        logger.info("Checking for new dates")
    """

    # Blob access is always traced; other layers follow DEBUG_LOGGING
    ALWAYS_DEBUG = {ComponentType.REPOSITORY}

    @staticmethod
    def _level_for(component_type: ComponentType) -> int:
        if component_type in LoggerFactory.ALWAYS_DEBUG:
            return logging.DEBUG
        if os.getenv('DEBUG_LOGGING', '').lower() == 'true':
            return logging.DEBUG
        return logging.INFO

    @classmethod
    def create_logger(
        cls,
        component_type: ComponentType,
        name: str,
        context: Optional[LogContext] = None
    ) -> logging.Logger:
        """
        Get the logger for a component, configuring it on first use.

        Calling again with a new context replaces the previous context; a
        logger name is reused across runs within one worker.

        Args:
            component_type: Application layer
            name: Component name, e.g. "DateWatchService"
            context: Optional run correlation

        Returns:
            logging.Logger
        """
        logger = logging.getLogger(f"{component_type.value}.{name}")
        logger.setLevel(cls._level_for(component_type))
        # Azure's root handler forwards to Application Insights
        logger.propagate = True

        if not any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(JSONFormatter())
            logger.addHandler(handler)

        dims_filter = next((f for f in logger.filters if isinstance(f, _DimensionsFilter)), None)
        if dims_filter is None:
            dims_filter = _DimensionsFilter()
            logger.addFilter(dims_filter)

        dims_filter.dimensions = {
            **(context.to_dict() if context else {}),
            'component_type': component_type.value,
            'component_name': name,
        }
        return logger

    @classmethod
    def create_with_context(
        cls,
        component_type: ComponentType,
        name: str,
        run_id: Optional[str] = None,
        invocation: Optional[str] = None,
        business_id: Optional[str] = None
    ) -> logging.Logger:
        """Shortcut for create_logger with a LogContext built from keywords."""
        context = LogContext(run_id=run_id, invocation=invocation, business_id=business_id)
        return cls.create_logger(component_type, name, context=context)


def log_exceptions(component_type: ComponentType = ComponentType.SERVICE,
                   component_name: Optional[str] = None,
                   logger: Optional[logging.Logger] = None):
    """
    Log any exception escaping the decorated function, then re-raise it.

    Usage:
        @log_exceptions(ComponentType.SERVICE, "DateWatchService")
        def known_dates(self): ...
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                log = logger or LoggerFactory.create_logger(
                    component_type, component_name or fn.__module__
                )
                log.error(
                    f"{fn.__qualname__} failed: {type(e).__name__}: {e}",
                    exc_info=True,
                    extra={'custom_dimensions': {
                        'function': fn.__qualname__,
                        'exception_type': type(e).__name__,
                    }}
                )
                raise
        return wrapper
    return decorator


__all__ = [
    'ComponentType',
    'LogContext',
    'JSONFormatter',
    'LoggerFactory',
    'log_exceptions',
]
