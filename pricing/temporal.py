"""
Date and sales-velocity arithmetic shared by the markdown engine.
"""

import math
from collections.abc import Sequence
from datetime import date, datetime

# Saturating stand-in for "never sells out"; keeps arithmetic finite and JSON-safe.
UNBOUNDED_DAYS = 999_999

SECONDS_PER_DAY = 24 * 60 * 60


def resolve_reference_date(reference_date: date | datetime | None = None) -> datetime:
    """Normalise a reference date to a naive datetime (now when omitted)."""
    if reference_date is None:
        return datetime.now()
    if isinstance(reference_date, datetime):
        return reference_date.replace(tzinfo=None)
    return datetime(reference_date.year, reference_date.month, reference_date.day)


def days_until_expiry(
    expiry_date: date | datetime, reference_date: date | datetime | None = None
) -> int:
    """
    Whole days from the reference date to expiry, rounding partial days up.

    Expiry dates are taken at midnight, so with a reference of 10:00 the day
    before expiry there are 14 hours left, which counts as 1 day. Past expiry
    gives zero or a negative number.
    """
    expiry = resolve_reference_date(expiry_date)
    reference = resolve_reference_date(reference_date)
    delta = (expiry - reference).total_seconds() / SECONDS_PER_DAY
    return math.ceil(delta)


def average_daily_sales(history: Sequence[float] | None) -> float:
    if not history:
        return 0.0
    return float(sum(history)) / len(history)


def days_to_sell_stock(stock: int, avg_daily_sales: float) -> int:
    """Days needed to clear stock at the current velocity, UNBOUNDED_DAYS if nothing sells."""
    if avg_daily_sales <= 0:
        return UNBOUNDED_DAYS
    return min(UNBOUNDED_DAYS, math.ceil(stock / avg_daily_sales))


def is_unbounded(days: int) -> bool:
    return days >= UNBOUNDED_DAYS
