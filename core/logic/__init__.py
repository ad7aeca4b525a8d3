"""
Core Logic - pure functions.

Exports:
    normalize_date, normalize_dates, calendar_today, reconcile, ReconcileResult
"""

from .reconcile import (
    normalize_date,
    normalize_dates,
    calendar_today,
    reconcile,
    ReconcileResult,
)

__all__ = [
    'normalize_date',
    'normalize_dates',
    'calendar_today',
    'reconcile',
    'ReconcileResult',
]
