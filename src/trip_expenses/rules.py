"""Per-diem and mileage rules.

Very simplified German domestic helper: 28 for a stay of at least 24 hours,
14 for at least 8 hours, nothing below that. Provided meals reduce the
base amount by 20% (breakfast) and 40% each (lunch, dinner).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from .models import ProvidedMeals
from .money import ZERO
from .settings import DEFAULT_SETTINGS, Settings

Timestamp = Union[str, datetime]

SECONDS_PER_HOUR = 3600


def _parse_timestamp(value: Timestamp) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def hours(start: Timestamp, end: Timestamp) -> float:
    """Elapsed hours between two timestamps, never negative.

    Unparsable timestamps, and naive/aware pairs that cannot be compared,
    count as an empty span.
    """
    start_at = _parse_timestamp(start)
    end_at = _parse_timestamp(end)
    if start_at is None or end_at is None:
        return 0.0
    try:
        elapsed = (end_at - start_at).total_seconds() / SECONDS_PER_HOUR
    except TypeError:
        return 0.0
    return max(0.0, elapsed)


def base_rate(duration_hours: float, settings: Settings = DEFAULT_SETTINGS) -> Decimal:
    if duration_hours >= settings.full_day_hours:
        return settings.full_day_rate
    if duration_hours >= settings.partial_day_hours:
        return settings.partial_day_rate
    return ZERO


def per_diem(
    duration_hours: float,
    meals: ProvidedMeals,
    settings: Settings = DEFAULT_SETTINGS,
) -> Decimal:
    base = base_rate(duration_hours, settings)
    reduction = (
        (base * settings.breakfast_ratio if meals.breakfast else ZERO)
        + (base * settings.lunch_ratio if meals.lunch else ZERO)
        + (base * settings.dinner_ratio if meals.dinner else ZERO)
    )
    return max(ZERO, base - reduction)


def mileage_reimbursement(mileage_km: Decimal, settings: Settings = DEFAULT_SETTINGS) -> Decimal:
    return mileage_km * settings.mileage_rate
