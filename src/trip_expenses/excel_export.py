from __future__ import annotations

from pathlib import Path
from typing import Any

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font

from .aggregation import total_for_trip
from .models import AppState
from .money import finite_or_zero, money
from .settings import DEFAULT_SETTINGS, Settings

TRIPS_SHEET = "Trips"
EXPENSES_SHEET = "Expenses"

TRIP_COLUMNS = [
    "Trip ID",
    "Origin",
    "Destination",
    "Start",
    "End",
    "Purpose",
    "Customer",
    "Project",
    "Mileage (km)",
    "Expenses",
    "Per-diem",
    "Mileage",
    "Total",
]
EXPENSE_COLUMNS = ["Expense ID", "Trip ID", "Date", "Category", "Amount", "Currency", "Note"]


def export_workbook(
    state: AppState,
    output_path: Path | str,
    settings: Settings = DEFAULT_SETTINGS,
) -> Path:
    """Write one row per trip with its computed totals, plus the expense lines."""
    workbook = Workbook()
    trips_ws = workbook.active
    trips_ws.title = TRIPS_SHEET
    _append_header(trips_ws, TRIP_COLUMNS)

    for trip in state.trips:
        totals = total_for_trip(trip, state.expenses, settings)
        trips_ws.append(
            [
                trip.id,
                trip.origin,
                trip.destination,
                trip.start_date,
                trip.end_date,
                trip.purpose,
                trip.customer or "",
                trip.project or "",
                float(trip.mileage_km),
                float(money(totals.expense_sum)),
                float(money(totals.per_diem)),
                float(money(totals.mileage)),
                float(money(totals.total)),
            ]
        )

    expenses_ws = workbook.create_sheet(EXPENSES_SHEET)
    _append_header(expenses_ws, EXPENSE_COLUMNS)
    for expense in state.expenses:
        expenses_ws.append(
            [
                expense.id,
                expense.trip_id,
                expense.date,
                expense.category.value,
                float(money(finite_or_zero(expense.amount))),
                expense.currency.value,
                expense.note or "",
            ]
        )

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)
    return output_path


def _append_header(sheet: Any, columns: list[str]) -> None:
    sheet.append(columns)
    for cell in sheet[1]:
        cell.font = Font(bold=True)


def read_cells(path: Path | str, cells: list[str], sheet_name: str) -> dict[str, Any]:
    """Utility for validation/testing: read exact cell values from an exported workbook."""
    workbook = load_workbook(path, data_only=False)
    sheet = workbook[sheet_name]
    return {cell: sheet[cell].value for cell in cells}
