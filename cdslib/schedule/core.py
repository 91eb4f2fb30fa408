"""
Core data structures for schedule generation.
"""

from dataclasses import dataclass
from datetime import date
from typing import Tuple

from cdslib.conventions.daycount import DayCountConvention
from cdslib.conventions.types import Frequency


@dataclass(frozen=True)
class SchedulePeriod:
    """Represents a single period in a payment schedule."""

    start_date: date
    end_date: date
    unadjusted_start_date: date
    unadjusted_end_date: date

    def __post_init__(self):
        if self.end_date <= self.start_date:
            raise ValueError(
                f"Period end {self.end_date} must be after start {self.start_date}"
            )

    def year_fraction(self, day_count: DayCountConvention) -> float:
        return day_count.year_fraction(self.start_date, self.end_date)

    @property
    def accrual_days(self) -> int:
        """Number of calendar days in accrual period."""
        return (self.end_date - self.start_date).days


@dataclass(frozen=True)
class Schedule:
    """Ordered, contiguous sequence of schedule periods."""

    periods: Tuple[SchedulePeriod, ...]
    frequency: Frequency

    def __post_init__(self):
        if not self.periods:
            raise ValueError("Schedule must contain at least one period")

    def size(self) -> int:
        return len(self.periods)

    @property
    def first_period(self) -> SchedulePeriod:
        return self.periods[0]

    @property
    def last_period(self) -> SchedulePeriod:
        return self.periods[-1]

    def __len__(self) -> int:
        return len(self.periods)

    def __iter__(self):
        return iter(self.periods)
