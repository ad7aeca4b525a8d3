"""
Date Watch Service - Run Orchestration.

Coordinates one watch run between the trigger layer and infrastructure:
    1. Load the persisted known dates
    2. Fetch the currently available dates
    3. Reconcile (diff, prune)
    4. Persist the updated set when it changed
    5. Report newly found dates in the log

Any error aborts the run before step 4, so a failed fetch or a bad date
never overwrites good state.

Exports:
    DateWatchService: Watch run coordinator
"""

import uuid
from datetime import date, datetime, timezone, tzinfo
from typing import Optional, Set

from core.logic.reconcile import reconcile, calendar_today
from core.models.watch_run import DateWatchRunResult
from infrastructure.available_dates_client import AvailableDatesClient
from infrastructure.known_dates_repository import KnownDatesRepository
from util_logger import LoggerFactory, ComponentType, log_exceptions


class DateWatchService:
    """
    Runs the load → fetch → reconcile → persist cycle.

    Collaborators are injected; the service never reads configuration.
    """

    def __init__(
        self,
        known_dates_repo: KnownDatesRepository,
        dates_client: AvailableDatesClient,
        tz: tzinfo = timezone.utc
    ):
        """
        Args:
            known_dates_repo: Persisted known-dates set
            dates_client: Remote available-dates source
            tz: Zone whose calendar date defines 'today'
        """
        self.known_dates_repo = known_dates_repo
        self.dates_client = dates_client
        self.tz = tz

    def run(self, now: Optional[datetime] = None, invocation: str = "timer") -> DateWatchRunResult:
        """
        Execute one watch run.

        Args:
            now: The single timestamp used for the whole run (defaults to UTC now)
            invocation: "timer" or "http", for log correlation

        Returns:
            DateWatchRunResult

        Raises:
            FetchError, ParseError, StorageError: Run aborted, nothing persisted
        """
        if now is None:
            now = datetime.now(timezone.utc)
        run_id = uuid.uuid4().hex[:8]
        logger = LoggerFactory.create_with_context(
            ComponentType.SERVICE, "DateWatchService",
            run_id=run_id, invocation=invocation,
            business_id=getattr(self.dates_client, "business_id", None)
        )

        logger.info(
            f"🔎 Checking for new available dates (today={calendar_today(now, self.tz).isoformat()}, "
            f"now={now.isoformat()})"
        )

        state = self.known_dates_repo.load()
        if not state.found:
            logger.warning("No prior known-dates state - every upcoming date will be reported as new")

        raw_dates = self.dates_client.fetch_dates()
        logger.info(f"Received {len(raw_dates)} dates from the remote source. Checking for new entries...")

        result = reconcile(state.dates, raw_dates, now, tz=self.tz)

        if result.has_new_dates:
            for found in result.newly_found:
                logger.info(f"🆕 Found new available date: {found.strftime('%a %b %d %Y')}")
        else:
            logger.info("Did not find any new available dates")

        if result.pruned:
            logger.info(
                f"Pruning {len(result.pruned)} past dates: "
                + ", ".join(d.isoformat() for d in sorted(result.pruned))
            )

        persisted = False
        if result.state_changed:
            self.known_dates_repo.save(result.updated_known)
            persisted = True
        else:
            logger.debug("Known dates unchanged - skipping write")

        return DateWatchRunResult(
            run_id=run_id,
            started_at=now,
            had_prior_state=state.found,
            observed_count=result.observed_count,
            new_dates=result.newly_found,
            pruned_dates=sorted(result.pruned),
            known_count=len(result.updated_known),
            persisted=persisted,
        )

    @log_exceptions(ComponentType.SERVICE, "DateWatchService")
    def known_dates(self) -> Set[date]:
        """
        Currently persisted known dates (read-only, no pruning).

        Raises:
            StorageError, ParseError
        """
        return set(self.known_dates_repo.load().dates)


__all__ = ['DateWatchService']
