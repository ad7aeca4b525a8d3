# ============================================================================
# DATE SET RECONCILIATION
# ============================================================================
# STATUS: Core - Pure functions, no I/O
# PURPOSE: Normalize date encodings, diff observed vs known, prune past dates
# ============================================================================
"""
Date Set Reconciliation.

Contains the diff-and-prune logic of a watch run, separated from storage
and HTTP. All functions are pure.

Exports:
    normalize_date: Any supported date encoding -> datetime.date
    normalize_dates: Iterable of encodings -> set of datetime.date
    calendar_today: Calendar date of 'now' in a given zone
    reconcile: Compute newly found dates and the updated known set
    ReconcileResult: Outcome of reconcile()
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Any, FrozenSet, Iterable, List, Optional, Set, Union

from dateutil import parser as date_parser

from exceptions import ParseError


# JavaScript Date.toString() appends "(Eastern Standard Time)" style names
_TRAILING_ZONE_NAME = re.compile(r"\s*\([^)]*\)\s*$")

# "Mar 03,2023": dateutil drops a year glued to the comma
_TIGHT_COMMA = re.compile(r",(?=\S)")

# Two distinct fill-in defaults: a component dateutil had to borrow from the
# default shows up as a difference between the two parses.
_PROBE_DEFAULT_A = datetime(2000, 1, 1)
_PROBE_DEFAULT_B = datetime(2001, 2, 2)


def normalize_date(value: Union[str, date, datetime]) -> date:
    """
    Normalize a date encoding to a calendar date.

    Time-of-day and UTC offsets are discarded without conversion: the
    calendar date as written is the one kept.

    Args:
        value: "3/3/2023", "Fri Mar 03 2023", "Mar 03,2023", "2023-03-03",
               "2023-03-03T10:00:00-05:00", a date or a datetime

    Returns:
        datetime.date

    Raises:
        ParseError: Not a string/date, empty, unparseable, or missing
                    year, month or day
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ParseError(value, f"expected a date string, got {type(value).__name__}")

    text = _TRAILING_ZONE_NAME.sub("", value.strip())
    text = _TIGHT_COMMA.sub(", ", text)
    if not text:
        raise ParseError(value, "empty date string")

    try:
        first = date_parser.parse(text, default=_PROBE_DEFAULT_A)
        second = date_parser.parse(text, default=_PROBE_DEFAULT_B)
    except (ValueError, OverflowError) as e:
        raise ParseError(value, str(e)) from e

    if first.date() != second.date():
        raise ParseError(value, "incomplete date (year, month and day are required)")
    return first.date()


def normalize_dates(values: Iterable[Any]) -> Set[date]:
    """Normalize every entry; the first bad entry raises ParseError."""
    return {normalize_date(v) for v in values}


def calendar_today(now: Union[datetime, date], tz: Optional[tzinfo] = None) -> date:
    """
    Calendar date of 'now'.

    Aware datetimes are converted to tz first when tz is given; naive
    datetimes and plain dates are taken as-is.
    """
    if isinstance(now, datetime):
        if tz is not None and now.tzinfo is not None:
            now = now.astimezone(tz)
        return now.date()
    return now


@dataclass(frozen=True)
class ReconcileResult:
    """
    Outcome of one reconciliation.

    Attributes:
        newly_found: Observed, not past, not previously known (ascending)
        updated_known: Non-past known dates plus newly found dates
        pruned: Known dates dropped for being before today
        observed_count: Raw entries received
        actionable_count: Distinct observed dates that are today or later
    """
    newly_found: List[date]
    updated_known: FrozenSet[date]
    pruned: FrozenSet[date] = field(default_factory=frozenset)
    observed_count: int = 0
    actionable_count: int = 0

    @property
    def has_new_dates(self) -> bool:
        return bool(self.newly_found)

    @property
    def state_changed(self) -> bool:
        """True when the persisted set must be rewritten."""
        return bool(self.newly_found) or bool(self.pruned)


def reconcile(
    known: Iterable[Any],
    observed_raw: Iterable[Any],
    now: Union[datetime, date],
    tz: Optional[tzinfo] = None
) -> ReconcileResult:
    """
    Diff observed dates against known dates and prune the past.

    A date is past when it is strictly before the calendar date of now;
    today's date is still actionable. Past known dates are dropped whether
    or not the source still lists them.

    Args:
        known: Previously persisted dates (dates or encodings)
        observed_raw: Raw entries from the remote source
        now: Single timestamp for the whole run
        tz: Zone used to take the calendar date of an aware 'now'

    Returns:
        ReconcileResult

    Raises:
        ParseError: Any known or observed entry cannot be normalized
    """
    today = calendar_today(now, tz)
    observed_list = list(observed_raw)

    known_dates = normalize_dates(known)
    observed = normalize_dates(observed_list)

    actionable = {d for d in observed if d >= today}
    newly_found = sorted(actionable - known_dates)

    pruned = frozenset(d for d in known_dates if d < today)
    updated_known = frozenset((known_dates - pruned) | set(newly_found))

    return ReconcileResult(
        newly_found=newly_found,
        updated_known=updated_known,
        pruned=pruned,
        observed_count=len(observed_list),
        actionable_count=len(actionable),
    )


__all__ = [
    'normalize_date',
    'normalize_dates',
    'calendar_today',
    'reconcile',
    'ReconcileResult',
]
