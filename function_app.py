"""
Azure Functions entry point for the Available Dates Watcher.

Polls a booking site's "available dates" endpoint on a schedule, compares
the answer with the set of dates already seen (a JSON document in Blob
Storage), logs any dates that are new, and persists the updated set.

Architecture:
    Timer (WATCH_SCHEDULE) -> DateWatchTimerHandler -> DateWatchService
                                                           |
                              KnownDatesRepository <-------+-------> AvailableDatesClient
                              (Blob Storage JSON)                    (HTTP POST, JSON)

Exports:
    app: Azure Function App instance

Endpoints:
    Timer:
        date_watch_timer - One watch cycle per WATCH_SCHEDULE tick

    HTTP:
        GET  /api/health             - Health check (add ?deep=true for blob check)
        POST /api/watch/run          - Run one watch cycle now
        GET  /api/watch/known-dates  - List persisted known dates

Environment Variables:
    KNOWN_DATES_STORAGE_CONNECTION: Blob connection string (falls back to AzureWebJobsStorage)
    KNOWN_DATES_STORAGE_ACCOUNT: Storage account name (managed identity alternative)
    KNOWN_DATES_CONTAINER: Container holding the known-dates document
    KNOWN_DATES_BLOB: Blob name of the known-dates document
    AVAILABLE_DATES_URL: Source endpoint
    AVAILABLE_DATES_BUSINESS_ID / AVAILABLE_DATES_SP_ID: Request body identifiers
    WATCH_SCHEDULE: NCRONTAB schedule (six fields)
    WATCH_TIMEZONE: IANA zone that defines "today"
"""

# ========================================================================
# IMPORTS - Categorized by source for maintainability
# ========================================================================

# Native Python modules
import logging

# Azure SDK modules (3rd party - Microsoft)
import azure.functions as func

# Suppress Azure Identity and Azure SDK authentication/HTTP logging
logging.getLogger("azure.identity").setLevel(logging.WARNING)
logging.getLogger("azure.identity._internal").setLevel(logging.WARNING)
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)
logging.getLogger("azure.storage").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("msal").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

# Application modules (our code)
from util_logger import LoggerFactory, ComponentType
from config.env_validation import log_validation_results
from triggers.date_watch import date_watch_handler
from triggers.watch_admin import watch_run_trigger, known_dates_trigger
from triggers.health import health_check_trigger

logger = LoggerFactory.create_logger(ComponentType.CORE, "function_app")

# ========================================================================
# STARTUP VALIDATION
# ========================================================================
# Environment problems are logged here and surface again as a
# ConfigurationError on the first run; the host keeps starting.
log_validation_results(LoggerFactory.create_logger(ComponentType.VALIDATOR, "startup"))

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)


@app.route(route="health", methods=["GET"])
def health(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint using HTTP trigger base class."""
    return health_check_trigger.handle_request(req)


@app.route(route="watch/run", methods=["POST"])
def watch_run(req: func.HttpRequest) -> func.HttpResponse:
    """Run one watch cycle immediately."""
    return watch_run_trigger.handle_request(req)


@app.route(route="watch/known-dates", methods=["GET"])
def watch_known_dates(req: func.HttpRequest) -> func.HttpResponse:
    """Return the persisted known dates."""
    return known_dates_trigger.handle_request(req)


# ============================================================================
# TIMER TRIGGERS
# ============================================================================

@app.timer_trigger(
    schedule="%WATCH_SCHEDULE%",  # App setting, default hourly "0 0 * * * *"
    arg_name="timer",
    run_on_startup=False
)
def date_watch_timer(timer: func.TimerRequest) -> None:
    """
    Check the source for newly available dates.

    Failures are logged by the handler and not re-raised; the next tick
    retries from the last persisted state.
    """
    date_watch_handler.handle(timer)


logger.info("✅ Function app initialized: date_watch_timer, health, watch/run, watch/known-dates")
