from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import time
from decimal import Decimal
import logging
from pathlib import Path
from typing import Any

import yaml

from .money import to_decimal

logger = logging.getLogger(__name__)


class SettingsError(ValueError):
    """Raised when a settings file cannot be applied."""


_DECIMAL_FIELDS = (
    "full_day_rate",
    "partial_day_rate",
    "breakfast_ratio",
    "lunch_ratio",
    "dinner_ratio",
    "mileage_rate",
)
_FLOAT_FIELDS = {"full_day_hours", "partial_day_hours"}


@dataclass(frozen=True)
class Settings:
    """Rule constants for per-diem and mileage (simplified, not authoritative)."""

    full_day_rate: Decimal = Decimal("28")
    partial_day_rate: Decimal = Decimal("14")
    full_day_hours: float = 24.0
    partial_day_hours: float = 8.0
    breakfast_ratio: Decimal = Decimal("0.2")
    lunch_ratio: Decimal = Decimal("0.4")
    dinner_ratio: Decimal = Decimal("0.4")
    mileage_rate: Decimal = Decimal("0.30")
    # Reference times of day anchoring a trip's start and end dates.
    workday_start: str = "08:00"
    workday_end: str = "18:00"

    def __post_init__(self) -> None:
        for name in _DECIMAL_FIELDS:
            raw = getattr(self, name)
            value = to_decimal(raw)
            if not value.is_finite() or value < 0:
                raise SettingsError(f"{name} must be a non-negative number, got {raw!r}")
            object.__setattr__(self, name, value)


DEFAULT_SETTINGS = Settings()


def load_settings(path: Path | str, base: Settings = DEFAULT_SETTINGS) -> Settings:
    """Read YAML overrides from ``path`` on top of ``base``."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as settings_file:
        loaded = yaml.safe_load(settings_file)

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        msg = f"Settings file must contain a dictionary at root: {path}"
        raise SettingsError(msg)

    settings = replace(base, **_convert(loaded, path))
    logger.debug("loaded settings from %s", path)
    return settings


def _convert(values: dict[str, Any], path: Path) -> dict[str, Any]:
    known = {f.name for f in fields(Settings)}
    unknown = set(values) - known
    if unknown:
        raise SettingsError(f"Unknown settings in {path}: {sorted(unknown)}")

    converted: dict[str, Any] = {}
    for name, raw in values.items():
        if name in _DECIMAL_FIELDS:
            converted[name] = raw
        elif name in _FLOAT_FIELDS:
            try:
                converted[name] = float(raw)
            except (TypeError, ValueError) as exc:
                raise SettingsError(f"{name} must be a number, got {raw!r}") from exc
        else:
            # Unquoted HH:MM is read by YAML 1.1 as a base-60 integer.
            if not isinstance(raw, str):
                raise SettingsError(f"{name} must be a quoted HH:MM string, got {raw!r}")
            try:
                time.fromisoformat(raw)
            except ValueError as exc:
                raise SettingsError(f"{name} must be a time of day, got {raw!r}") from exc
            converted[name] = raw
    return converted
