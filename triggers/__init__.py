"""
Trigger Layer - Azure Functions entry point handlers.

Exports:
    TimerHandlerBase, BaseHttpTrigger: Base classes
    date_watch_handler: Scheduled watch run
    watch_run_trigger, known_dates_trigger: Manual watch endpoints
    health_check_trigger: Health endpoint
"""
