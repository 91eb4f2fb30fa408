"""Payment schedule generation and business day adjustment."""

from .adjustments import BusinessDayAdjustment, DaysAdjustment, adjust_date
from .core import Schedule, SchedulePeriod
from .generator import PeriodicSchedule, ScheduleError

__all__ = [
    "BusinessDayAdjustment",
    "DaysAdjustment",
    "adjust_date",
    "Schedule",
    "SchedulePeriod",
    "PeriodicSchedule",
    "ScheduleError",
]
