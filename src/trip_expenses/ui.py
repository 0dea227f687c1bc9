from __future__ import annotations

from decimal import Decimal
from html import escape
from typing import Sequence

from .aggregation import total_for_trip
from .models import Currency, DashboardSummary, Expense, Trip
from .money import money
from .settings import DEFAULT_SETTINGS, Settings
from .snapshot import SnapshotImportError

_SYMBOLS = {Currency.EUR: "€", Currency.USD: "$", Currency.GBP: "£", Currency.CHF: "CHF "}


def format_money(amount: Decimal, currency: Currency = Currency.EUR) -> str:
    symbol = _SYMBOLS[Currency(currency)]
    return f"{symbol}{money(amount):,.2f}"


def render_trip_list(
    trips: Sequence[Trip],
    expenses: Sequence[Expense],
    settings: Settings = DEFAULT_SETTINGS,
) -> str:
    if not trips:
        return '<section class="trip-list empty"><p>No trips yet.</p></section>'

    items = []
    for trip in trips:
        totals = total_for_trip(trip, expenses, settings)
        route = f"{trip.origin or '(origin)'} → {trip.destination or '(destination)'}"
        items.append(
            "<li>"
            f"<h3>{escape(route)}</h3>"
            f"<p>{escape(trip.start_date)} → {escape(trip.end_date)} · {escape(trip.purpose or '(purpose)')}</p>"
            f'<p class="total">{format_money(totals.total)}</p>'
            f"<p>Expenses {format_money(totals.expense_sum)} · "
            f"Per-diem {format_money(totals.per_diem)} · "
            f"Mileage {format_money(totals.mileage)}</p>"
            "</li>"
        )
    return (
        '<section class="trip-list">'
        f"<p>{len(trips)} trip(s)</p>"
        f"<ul>{''.join(items)}</ul>"
        "</section>"
    )


def render_dashboard(summary: DashboardSummary) -> str:
    return (
        '<section class="dashboard">'
        f'<p data-testid="trip-count">{summary.trip_count}</p>'
        f'<p data-testid="total-expenses">{format_money(summary.total)}</p>'
        f'<p data-testid="avg-expenses">{format_money(summary.average)}</p>'
        "</section>"
    )


def render_import_error(error: SnapshotImportError) -> str:
    return (
        '<section class="import-error error" role="alert">'
        "<h2>Import failed</h2>"
        f"<p>{escape(str(error))}</p>"
        "<p>Your current trips and expenses were left unchanged.</p>"
        "</section>"
    )
