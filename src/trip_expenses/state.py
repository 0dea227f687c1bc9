"""Immutable edits of the application state.

The presentation layer owns the current ``AppState`` and replaces it with the
value each operation returns. Nothing here mutates its arguments.
"""

from __future__ import annotations

from dataclasses import fields, replace
from datetime import date
from decimal import Decimal
import logging
from typing import Any, Optional
from uuid import uuid4

from .models import AppState, Category, Currency, Expense, Trip

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid4().hex[:12]


def today_iso() -> str:
    return date.today().isoformat()


def new_trip(**overrides: Any) -> Trip:
    today = today_iso()
    values: dict[str, Any] = {"id": new_id(), "start_date": today, "end_date": today}
    values.update(overrides)
    return Trip(**values)


def new_expense(trip_id: str, **overrides: Any) -> Expense:
    values: dict[str, Any] = {
        "id": new_id(),
        "trip_id": trip_id,
        "date": today_iso(),
        "category": Category.OTHER,
        "amount": Decimal("0"),
        "currency": Currency.EUR,
        "note": "",
    }
    values.update(overrides)
    return Expense(**values)


def _check_patch(record_type: type, changes: dict[str, Any]) -> None:
    editable = {f.name for f in fields(record_type)} - {"id"}
    for field_name in changes:
        if field_name not in editable:
            raise AttributeError(f"Unknown field: {field_name}")


def add_trip(state: AppState, trip: Optional[Trip] = None) -> AppState:
    trip = trip or new_trip()
    logger.debug("adding trip %s", trip.id)
    return replace(state, trips=(trip, *state.trips))


def update_trip(state: AppState, trip_id: str, **changes: Any) -> AppState:
    _check_patch(Trip, changes)
    trips = tuple(replace(t, **changes) if t.id == trip_id else t for t in state.trips)
    return replace(state, trips=trips)


def remove_trip(state: AppState, trip_id: str) -> AppState:
    """Drop the trip and every expense that references it."""
    logger.debug("removing trip %s", trip_id)
    return AppState(
        trips=tuple(t for t in state.trips if t.id != trip_id),
        expenses=tuple(e for e in state.expenses if e.trip_id != trip_id),
    )


def add_expense(state: AppState, trip_id: str, expense: Optional[Expense] = None) -> AppState:
    expense = expense or new_expense(trip_id)
    logger.debug("adding expense %s to trip %s", expense.id, trip_id)
    return replace(state, expenses=(expense, *state.expenses))


def update_expense(state: AppState, expense_id: str, **changes: Any) -> AppState:
    _check_patch(Expense, changes)
    expenses = tuple(
        replace(e, **changes) if e.id == expense_id else e for e in state.expenses
    )
    return replace(state, expenses=expenses)


def remove_expense(state: AppState, expense_id: str) -> AppState:
    return replace(state, expenses=tuple(e for e in state.expenses if e.id != expense_id))


def demo_state() -> AppState:
    """Seed shown on first start: one same-day customer visit with a train ticket."""
    trip = new_trip(
        origin="Berlin",
        destination="München",
        purpose="Kundentermin",
        customer="ACME GmbH",
        project="Rollout",
        mileage_km=Decimal("580"),
        include_lunch=True,
    )
    expense = new_expense(
        trip.id,
        category=Category.TRANSPORT,
        amount=Decimal("49.90"),
        note="ICE Ticket",
    )
    return AppState(trips=(trip,), expenses=(expense,))
