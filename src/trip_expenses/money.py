"""Numeric coercion and rounding helpers.

Amounts and distances arrive from free-form inputs and imported files. They
are coerced here so every total is computed with the same semantics.

Parsed values are limited to what a JSON number (an IEEE double) carries:
the snapshot file then holds exactly what the records hold, and no sum or
product of coerced values can leave the decimal context's exponent range.
Magnitudes beyond a double become infinite, as ``Number("1e400")`` does in
the browser version.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")


def _as_double(value: Decimal) -> Decimal:
    if not value.is_finite():
        return value
    return Decimal(repr(float(value)))


def to_decimal(value: Any) -> Decimal:
    """Best-effort conversion; unparsable input becomes ``Decimal("NaN")``."""
    if isinstance(value, bool) or value is None:
        return Decimal("NaN")
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, (Decimal, int)):
        return _as_double(Decimal(value))
    if isinstance(value, str):
        cleaned = value.replace(",", ".").strip()
        try:
            return _as_double(Decimal(cleaned))
        except (InvalidOperation, ValueError, OverflowError):
            return Decimal("NaN")
    return Decimal("NaN")


def finite_or_zero(value: Decimal) -> Decimal:
    return value if value.is_finite() else ZERO


def coerce_amount(value: Any) -> Decimal:
    return finite_or_zero(to_decimal(value))


def coerce_distance(value: Any) -> Decimal:
    distance = coerce_amount(value)
    return distance if distance > ZERO else ZERO


def money(value: Decimal) -> Decimal:
    # Quantizing needs every digit down to the cent within the context precision.
    if not value.is_finite() or value.adjusted() >= getcontext().prec - 2:
        return value
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
