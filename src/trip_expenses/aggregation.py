from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Sequence, Union

from .models import AppState, DashboardSummary, Expense, SortKey, Trip, TripTotals
from .money import ZERO, finite_or_zero
from .rules import hours, mileage_reimbursement, per_diem
from .settings import DEFAULT_SETTINGS, Settings

logger = logging.getLogger(__name__)


def expense_sum(trip_id: str, expenses: Iterable[Expense]) -> Decimal:
    """Nominal sum over the trip's expenses; non-finite amounts count as zero."""
    return sum(
        (finite_or_zero(e.amount) for e in expenses if e.trip_id == trip_id),
        ZERO,
    )


def trip_hours(trip: Trip, settings: Settings = DEFAULT_SETTINGS) -> float:
    return hours(
        f"{trip.start_date}T{settings.workday_start}",
        f"{trip.end_date}T{settings.workday_end}",
    )


def total_for_trip(
    trip: Trip,
    expenses: Iterable[Expense],
    settings: Settings = DEFAULT_SETTINGS,
) -> TripTotals:
    expenses_total = expense_sum(trip.id, expenses)
    allowance = per_diem(trip_hours(trip, settings), trip.meals, settings)
    mileage = mileage_reimbursement(trip.mileage_km, settings)
    return TripTotals(
        expense_sum=expenses_total,
        per_diem=allowance,
        mileage=mileage,
        total=expenses_total + allowance + mileage,
    )


def matches_filter(trip: Trip, filter_text: str) -> bool:
    query = filter_text.lower()
    haystacks = (trip.destination, trip.purpose, trip.customer or "", trip.project or "")
    return any(query in value.lower() for value in haystacks)


def _resolve_sort_key(key: Union[SortKey, str]) -> SortKey:
    try:
        return SortKey(key)
    except (TypeError, ValueError):
        logger.warning("unknown sort key %r, falling back to %r", key, SortKey.START.value)
        return SortKey.START


def sort_trips(
    trips: Sequence[Trip],
    expenses: Sequence[Expense],
    key: Union[SortKey, str],
    settings: Settings = DEFAULT_SETTINGS,
) -> list[Trip]:
    """Stable ascending sort; returns a new list and leaves ``trips`` untouched."""
    resolved = _resolve_sort_key(key)
    if resolved is SortKey.DEST:
        return sorted(trips, key=lambda t: t.destination)
    if resolved is SortKey.EXPENSE:
        return sorted(trips, key=lambda t: total_for_trip(t, expenses, settings).total)
    return sorted(trips, key=lambda t: t.start_date)


def visible_trips(
    state: AppState,
    filter_text: str = "",
    key: Union[SortKey, str] = SortKey.START,
    settings: Settings = DEFAULT_SETTINGS,
) -> list[Trip]:
    matching = [t for t in state.trips if matches_filter(t, filter_text)]
    return sort_trips(matching, state.expenses, key, settings)


def summarize(state: AppState, settings: Settings = DEFAULT_SETTINGS) -> DashboardSummary:
    total = sum(
        (total_for_trip(t, state.expenses, settings).total for t in state.trips),
        ZERO,
    )
    count = len(state.trips)
    average = total / count if count else ZERO
    return DashboardSummary(trip_count=count, total=total, average=average)
