from .aggregation import matches_filter, sort_trips, summarize, total_for_trip, visible_trips
from .models import (
    AppState,
    Category,
    Currency,
    DashboardSummary,
    Expense,
    ProvidedMeals,
    SortKey,
    Trip,
    TripTotals,
)
from .rules import hours, per_diem
from .settings import DEFAULT_SETTINGS, Settings, SettingsError, load_settings
from .snapshot import SnapshotImportError, export_state, import_state

__all__ = [
    "AppState",
    "Category",
    "Currency",
    "DEFAULT_SETTINGS",
    "DashboardSummary",
    "Expense",
    "ProvidedMeals",
    "Settings",
    "SettingsError",
    "SnapshotImportError",
    "SortKey",
    "Trip",
    "TripTotals",
    "export_state",
    "hours",
    "import_state",
    "load_settings",
    "matches_filter",
    "per_diem",
    "sort_trips",
    "summarize",
    "total_for_trip",
    "visible_trips",
]
