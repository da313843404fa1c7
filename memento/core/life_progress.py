"""Life-progress calculator — pure business logic.

Turns a birth date and a life expectancy into the numbers shown on the
memento mori progress bar.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time

_DAYS_PER_YEAR = 365.25
_SECONDS_PER_YEAR = _DAYS_PER_YEAR * 24 * 60 * 60


@dataclass(frozen=True)
class LifeProgress:
    """Bundled life-progress numbers."""

    age_years: int
    remaining_years: int
    lived_percentage: str      # one decimal place, e.g. "50.0"
    remaining_percentage: str  # one decimal place


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def age_in_years(birth_date: date | datetime, now: datetime) -> float:
    """Fractional age using 365.25-day years."""
    elapsed = now - _as_datetime(birth_date)
    return elapsed.total_seconds() / _SECONDS_PER_YEAR


def calculate_life_progress(
    birth_date: date | datetime | None,
    life_expectancy_years: float,
    now: datetime,
) -> LifeProgress | None:
    """Compute life progress, or None when no birth date is set.

    Args:
        birth_date: Date (or datetime) of birth; None means "not set".
        life_expectancy_years: Expected lifespan, must be positive.
        now: Evaluation time.

    Raises:
        ValueError: If life_expectancy_years is not positive.
    """
    if birth_date is None:
        return None
    if life_expectancy_years <= 0:
        raise ValueError(f"Life expectancy must be positive, got {life_expectancy_years}")

    age = age_in_years(birth_date, now)
    lived_ratio = 100 * age / life_expectancy_years

    return LifeProgress(
        age_years=math.floor(age),
        remaining_years=max(0, math.floor(life_expectancy_years - age)),
        lived_percentage=f"{min(100.0, lived_ratio):.1f}",
        remaining_percentage=f"{max(0.0, 100 - lived_ratio):.1f}",
    )
