"""
QuantLib-backed holiday calendars.

Calendars are identified by the short codes used on CDS confirmations
(``SAT_SUN``, ``USNY``, ``GBLO``, ...). Only weekend/holiday membership and
business-day shifting are needed by the schedule and offset logic.
"""

from datetime import date, datetime
from typing import Union

import QuantLib as ql


def _to_ql_date(dt: Union[date, datetime]) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    if isinstance(dt, datetime):
        dt = dt.date()
    return ql.Date(dt.day, dt.month, dt.year)


def _to_py_date(ql_date: ql.Date) -> date:
    """Convert QuantLib Date to Python date."""
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class Calendar:
    """Base calendar class for QuantLib-backed business day calculations."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    def is_business_day(self, dt: Union[date, datetime]) -> bool:
        """Check if date is a business day (not weekend or holiday)."""
        return self._ql_calendar.isBusinessDay(_to_ql_date(dt))

    def is_holiday(self, dt: Union[date, datetime]) -> bool:
        """Check if date is a holiday or weekend."""
        return self._ql_calendar.isHoliday(_to_ql_date(dt))

    def adjust(self, dt: Union[date, datetime], ql_convention: int) -> date:
        """Roll a date onto a business day with a QuantLib business day convention."""
        return _to_py_date(self._ql_calendar.adjust(_to_ql_date(dt), ql_convention))

    def add_business_days(self, start_date: Union[date, datetime], days: int) -> date:
        """Shift a date by a number of business days.

        Each step moves one calendar day and then skips non-business days, so a
        start date falling on a holiday is not adjusted first.
        """
        ql_result = self._ql_calendar.advance(_to_ql_date(start_date), days, ql.Days)
        return _to_py_date(ql_result)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Calendar({self.name!r})"


class SatSunCalendar(Calendar):
    """Calendar whose only non-business days are Saturday and Sunday."""

    def __init__(self):
        super().__init__("SAT_SUN", ql.WeekendsOnly())


class NoHolidaysCalendar(Calendar):
    """Calendar where every day is a business day."""

    def __init__(self):
        super().__init__("NO_HOLIDAYS", ql.NullCalendar())


class TargetCalendar(Calendar):
    """TARGET (Trans-European Automated Real-time Gross settlement Express Transfer) calendar."""

    def __init__(self):
        super().__init__("TARGET", ql.TARGET())


class UsnyCalendar(Calendar):
    """New York settlement calendar."""

    def __init__(self):
        super().__init__("USNY", ql.UnitedStates(ql.UnitedStates.Settlement))


class GbloCalendar(Calendar):
    """London settlement calendar."""

    def __init__(self):
        super().__init__("GBLO", ql.UnitedKingdom(ql.UnitedKingdom.Settlement))


# Pre-defined calendar instances
SAT_SUN = SatSunCalendar()
NO_HOLIDAYS = NoHolidaysCalendar()
TARGET = TargetCalendar()
USNY = UsnyCalendar()
GBLO = GbloCalendar()

# Calendar registry
CALENDARS = {
    "SAT_SUN": SAT_SUN,
    "WEEKEND": SAT_SUN,
    "NO_HOLIDAYS": NO_HOLIDAYS,
    "TARGET": TARGET,
    "EUTA": TARGET,
    "USNY": USNY,
    "GBLO": GBLO,
}


def get_calendar(name: str) -> Calendar:
    """Get a calendar by name."""
    name_upper = name.upper()
    if name_upper not in CALENDARS:
        raise ValueError(
            f"Unknown calendar: {name}. Available: {list(CALENDARS.keys())}"
        )
    return CALENDARS[name_upper]
