from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from .money import ZERO, coerce_amount, coerce_distance


class Category(str, Enum):
    HOTEL = "Hotel"
    TRANSPORT = "Transport"
    MEAL = "Meal"
    OTHER = "Other"


class Currency(str, Enum):
    EUR = "EUR"
    USD = "USD"
    GBP = "GBP"
    CHF = "CHF"


class SortKey(str, Enum):
    START = "start"
    DEST = "dest"
    EXPENSE = "expense"


@dataclass(frozen=True)
class ProvidedMeals:
    breakfast: bool = False
    lunch: bool = False
    dinner: bool = False


@dataclass(frozen=True)
class Trip:
    id: str
    origin: str = ""
    destination: str = ""
    start_date: str = ""
    end_date: str = ""
    purpose: str = ""
    customer: Optional[str] = ""
    project: Optional[str] = ""
    mileage_km: Decimal = ZERO
    include_breakfast: bool = False
    include_lunch: bool = False
    include_dinner: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "mileage_km", coerce_distance(self.mileage_km))

    @property
    def meals(self) -> ProvidedMeals:
        return ProvidedMeals(
            breakfast=self.include_breakfast,
            lunch=self.include_lunch,
            dinner=self.include_dinner,
        )


@dataclass(frozen=True)
class Expense:
    id: str
    trip_id: str
    date: str = ""
    category: Category = Category.OTHER
    amount: Decimal = ZERO
    currency: Currency = Currency.EUR
    note: Optional[str] = None

    def __post_init__(self) -> None:
        # Enum lookups reject values outside the closed sets.
        object.__setattr__(self, "category", Category(self.category))
        object.__setattr__(self, "currency", Currency(self.currency))
        object.__setattr__(self, "amount", coerce_amount(self.amount))


@dataclass(frozen=True)
class AppState:
    trips: tuple[Trip, ...] = field(default_factory=tuple)
    expenses: tuple[Expense, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "trips", tuple(self.trips))
        object.__setattr__(self, "expenses", tuple(self.expenses))

    def find_trip(self, trip_id: str) -> Optional[Trip]:
        return next((t for t in self.trips if t.id == trip_id), None)

    def expenses_for(self, trip_id: str) -> list[Expense]:
        return [e for e in self.expenses if e.trip_id == trip_id]


@dataclass(frozen=True)
class TripTotals:
    expense_sum: Decimal
    per_diem: Decimal
    mileage: Decimal
    total: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    trip_count: int
    total: Decimal
    average: Decimal
