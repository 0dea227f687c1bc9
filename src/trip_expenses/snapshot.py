"""JSON export/import of the full application state.

Documents use the camelCase field names of the browser version
(``startDate``, ``mileageKm``, ``tripId``...) so snapshots stay
interchangeable with it.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from .models import AppState, Category, Currency, Expense, Trip
from .money import ZERO, coerce_amount, coerce_distance
from .state import new_id

logger = logging.getLogger(__name__)


class SnapshotImportError(ValueError):
    """Raised when an import document is rejected; nothing is imported."""


class TripDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=new_id)
    origin: str = ""
    destination: str = ""
    start_date: str = Field("", alias="startDate")
    end_date: str = Field("", alias="endDate")
    purpose: str = ""
    customer: Optional[str] = ""
    project: Optional[str] = ""
    mileage_km: Decimal = Field(ZERO, alias="mileageKm")
    include_breakfast: bool = Field(False, alias="includeBreakfast")
    include_lunch: bool = Field(False, alias="includeLunch")
    include_dinner: bool = Field(False, alias="includeDinner")

    @field_validator("mileage_km", mode="before")
    @classmethod
    def _coerce_mileage(cls, value: Any) -> Decimal:
        return coerce_distance(value)

    @field_serializer("mileage_km")
    def _mileage_as_number(self, value: Decimal) -> float:
        return float(value)

    @classmethod
    def from_record(cls, trip: Trip) -> "TripDocument":
        return cls(
            id=trip.id,
            origin=trip.origin,
            destination=trip.destination,
            start_date=trip.start_date,
            end_date=trip.end_date,
            purpose=trip.purpose,
            customer=trip.customer,
            project=trip.project,
            mileage_km=trip.mileage_km,
            include_breakfast=trip.include_breakfast,
            include_lunch=trip.include_lunch,
            include_dinner=trip.include_dinner,
        )

    def to_record(self) -> Trip:
        return Trip(**dict(self))


class ExpenseDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=new_id)
    trip_id: str = Field(..., alias="tripId")
    date: str = ""
    category: Category = Category.OTHER
    amount: Decimal = ZERO
    currency: Currency = Currency.EUR
    note: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> Decimal:
        return coerce_amount(value)

    @field_serializer("amount")
    def _amount_as_number(self, value: Decimal) -> float:
        return float(value)

    @classmethod
    def from_record(cls, expense: Expense) -> "ExpenseDocument":
        return cls(
            id=expense.id,
            trip_id=expense.trip_id,
            date=expense.date,
            category=expense.category,
            amount=expense.amount,
            currency=expense.currency,
            note=expense.note,
        )

    def to_record(self) -> Expense:
        return Expense(**dict(self))


class StateDocument(BaseModel):
    trips: list[TripDocument]
    expenses: list[ExpenseDocument]

    @classmethod
    def from_state(cls, state: AppState) -> "StateDocument":
        return cls(
            trips=[TripDocument.from_record(t) for t in state.trips],
            expenses=[ExpenseDocument.from_record(e) for e in state.expenses],
        )

    def to_state(self) -> AppState:
        return AppState(
            trips=tuple(t.to_record() for t in self.trips),
            expenses=tuple(e.to_record() for e in self.expenses),
        )


def export_state(state: AppState) -> str:
    document = StateDocument.from_state(state)
    counts = {"trips": len(state.trips), "expenses": len(state.expenses)}
    logger.debug("exporting snapshot", extra=counts)
    return document.model_dump_json(by_alias=True, indent=2)


def import_state(text: str | bytes) -> AppState:
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("rejected snapshot: %s", exc)
        raise SnapshotImportError("Could not parse JSON.") from exc

    if not (
        isinstance(parsed, dict)
        and isinstance(parsed.get("trips"), list)
        and isinstance(parsed.get("expenses"), list)
    ):
        logger.warning("rejected snapshot: missing trips/expenses arrays")
        raise SnapshotImportError("Invalid JSON shape.")

    try:
        document = StateDocument.model_validate(parsed)
    except ValidationError as exc:
        logger.warning("rejected snapshot: invalid entries", extra={"errors": exc.error_count()})
        raise SnapshotImportError(f"Invalid snapshot entries: {exc.error_count()} error(s).") from exc

    state = document.to_state()
    logger.debug("imported snapshot", extra={"trips": len(state.trips), "expenses": len(state.expenses)})
    return state


def snapshot_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"travel-mate-{int(now.timestamp() * 1000)}.json"


def write_snapshot(state: AppState, directory: Path | str, now: Optional[datetime] = None) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    file_path = directory / snapshot_filename(now)
    # Fail rather than overwrite an existing snapshot.
    with file_path.open("x", encoding="utf-8") as f:
        f.write(export_state(state))
    return file_path


def read_snapshot(path: Path | str) -> AppState:
    return import_state(Path(path).read_text(encoding="utf-8"))
