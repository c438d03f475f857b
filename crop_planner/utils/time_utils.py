"""
Date helpers for recency windows.

"Months since" is deliberately coarse: a month is a flat 30 days and the
distance is absolute, so a planned (future) sowing 45 days out is reported
as 1 month away, the same as one 45 days in the past.

Pass an explicit ``as_of`` wherever results must be reproducible; the
``today()`` fallback reads the wall clock.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

DAYS_PER_MONTH = 30


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(tz=timezone.utc)


def today() -> date:
    """Return the current UTC calendar date."""
    return utcnow().date()


def months_since(event_date: date, as_of: Optional[date] = None) -> int:
    """Whole 30-day months between ``event_date`` and ``as_of``.

    Args:
        event_date: Date of the planting or pest/disease observation.
        as_of: Reference date; defaults to ``today()``.

    Returns:
        ``abs(as_of - event_date).days // 30``, always ``>= 0``.
    """
    if as_of is None:
        as_of = today()
    return abs((as_of - event_date).days) // DAYS_PER_MONTH
