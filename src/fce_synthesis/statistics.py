"""Pure numeric helpers for trial data.

Every function is total over its domain: no-data and divide-by-zero
conditions return 0 rather than raising or leaking NaN/Infinity.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fce_synthesis.models import TestRecord

_DAYS_PER_YEAR = 365.25


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def valid_trials(trials: Iterable[Any]) -> list[float]:
    """Return the trial values that count: finite numbers greater than zero."""
    return [float(v) for v in trials if _is_number(v) and v > 0]


def average(trials: Iterable[Any]) -> float:
    """Mean of valid trial values, rounded to 2 decimals; 0 if none."""
    values = valid_trials(trials)
    if not values:
        return 0.0
    return round(sum(values) / len(values), 2)


def coefficient_of_variation(trials: Iterable[Any]) -> int:
    """Population standard deviation over mean, as a whole percent."""
    values = valid_trials(trials)
    if not values:
        return 0
    mean = sum(values) / len(values)
    if mean <= 0:
        return 0
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return round(math.sqrt(variance) / mean * 100)


def raw_deficiency(left_avg: float, right_avg: float) -> float:
    """Unrounded ``|left - right| / max * 100``; 0 when both sides are 0."""
    high = max(left_avg, right_avg)
    if high <= 0:
        return 0.0
    return abs(left_avg - right_avg) / high * 100


def bilateral_deficiency(left_avg: float, right_avg: float) -> float:
    """Percent gap between sides, one decimal; 0 if either side is missing."""
    if not left_avg or not right_avg:
        return 0.0
    high = max(left_avg, right_avg)
    low = min(left_avg, right_avg)
    return round((high - low) / high * 100, 1)


def bar_height(value: float, max_value: float, max_px: float = 100) -> float:
    """Scale *value* linearly against *max_value*; negatives clamp to 0."""
    if max_value <= 0:
        return 0.0
    return max(value, 0.0) / max_value * max_px


def parse_date(value: Any) -> date | None:
    """Parse ISO or US-style date strings used in stored records."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in ("%m/%d/%Y", "%m-%d-%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def calculate_age(date_of_birth: Any, today: date | None = None) -> int | None:
    """Whole years since *date_of_birth*; ``None`` if it cannot be parsed."""
    dob = parse_date(date_of_birth)
    if dob is None:
        return None
    today = today or date.today()
    return max(0, math.floor((today - dob).days / _DAYS_PER_YEAR))


@dataclass(frozen=True)
class TrialStats:
    """Per-side averages and CVs for one test record."""

    left_average: float = 0.0
    right_average: float = 0.0
    left_cv: int = 0
    right_cv: int = 0

    @property
    def deficiency(self) -> float:
        return bilateral_deficiency(self.left_average, self.right_average)

    @property
    def is_bilateral(self) -> bool:
        return self.left_average > 0 and self.right_average > 0

    @property
    def has_data(self) -> bool:
        return self.left_average > 0 or self.right_average > 0

    @property
    def mean_average(self) -> float:
        """Mean of the non-zero side averages."""
        sides = [v for v in (self.left_average, self.right_average) if v > 0]
        return sum(sides) / len(sides) if sides else 0.0


def trial_stats(record: TestRecord) -> TrialStats:
    """Compute :class:`TrialStats` for *record*."""
    left = record.left_side.trials
    right = record.right_side.trials
    return TrialStats(
        left_average=average(left),
        right_average=average(right),
        left_cv=coefficient_of_variation(left),
        right_cv=coefficient_of_variation(right),
    )
