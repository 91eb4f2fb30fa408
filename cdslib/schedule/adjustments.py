"""
Date adjustment functions and adjustment value objects.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

import QuantLib as ql

from cdslib.conventions.calendars import Calendar
from cdslib.conventions.reference_data import ReferenceData
from cdslib.conventions.types import BusinessDayConvention


_QL_CONVENTIONS = {
    BusinessDayConvention.NO_ADJUSTMENT: ql.Unadjusted,
    BusinessDayConvention.FOLLOWING: ql.Following,
    BusinessDayConvention.MODIFIED_FOLLOWING: ql.ModifiedFollowing,
    BusinessDayConvention.PRECEDING: ql.Preceding,
    BusinessDayConvention.MODIFIED_PRECEDING: ql.ModifiedPreceding,
}


def adjust_date(
    dt: Union[date, datetime], convention: BusinessDayConvention, calendar: Calendar
) -> date:
    """Apply business day adjustment to a date."""
    if isinstance(dt, datetime):
        dt = dt.date()
    if convention not in _QL_CONVENTIONS:
        raise ValueError(f"Unknown business day convention: {convention}")
    if convention == BusinessDayConvention.NO_ADJUSTMENT:
        return dt
    return calendar.adjust(dt, _QL_CONVENTIONS[convention])


@dataclass(frozen=True)
class BusinessDayAdjustment:
    """A business day convention applied on a named calendar."""

    convention: BusinessDayConvention
    calendar: str = "NO_HOLIDAYS"

    @classmethod
    def of(cls, convention: BusinessDayConvention, calendar: str) -> "BusinessDayAdjustment":
        return cls(convention, calendar)

    def adjust(self, dt: Union[date, datetime], ref_data: ReferenceData) -> date:
        if self.convention == BusinessDayConvention.NO_ADJUSTMENT:
            return dt.date() if isinstance(dt, datetime) else dt
        return adjust_date(dt, self.convention, ref_data.calendar(self.calendar))


BusinessDayAdjustment.NONE = BusinessDayAdjustment(BusinessDayConvention.NO_ADJUSTMENT)


@dataclass(frozen=True)
class DaysAdjustment:
    """Shift of a date by calendar or business days, then an optional adjustment.

    With a calendar, ``days`` counts business days on that calendar. Without
    one, ``days`` counts calendar days and the result is adjusted with
    ``adjustment``.
    """

    days: int
    calendar: Optional[str] = None
    adjustment: BusinessDayAdjustment = BusinessDayAdjustment.NONE

    @classmethod
    def of_calendar_days(
        cls, days: int, adjustment: Optional[BusinessDayAdjustment] = None
    ) -> "DaysAdjustment":
        return cls(days, None, adjustment or BusinessDayAdjustment.NONE)

    @classmethod
    def of_business_days(cls, days: int, calendar: str) -> "DaysAdjustment":
        return cls(days, calendar)

    def adjust(self, dt: Union[date, datetime], ref_data: ReferenceData) -> date:
        if isinstance(dt, datetime):
            dt = dt.date()
        if self.calendar is None:
            shifted = dt + timedelta(days=self.days)
        else:
            shifted = ref_data.calendar(self.calendar).add_business_days(dt, self.days)
        return self.adjustment.adjust(shifted, ref_data)
