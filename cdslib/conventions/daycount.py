"""
QuantLib-backed day count convention implementations.

Day counts are used twice in CDS valuation: for coupon accrual year fractions
(typically ACT/360) and for converting dates into curve times (ACT/365F for
ISDA-compliant curves).
"""

from datetime import date, datetime
from typing import Union

import QuantLib as ql


def to_date(dt: Union[date, datetime]) -> date:
    """Convert datetime to date if needed."""
    return dt.date() if isinstance(dt, datetime) else dt


def _to_ql_date(dt: Union[date, datetime]) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    py_date = to_date(dt)
    return ql.Date(py_date.day, py_date.month, py_date.year)


class DayCountConvention:
    """Base class for QuantLib-backed day count conventions."""

    def __init__(self, name: str, ql_daycount: ql.DayCounter):
        self.name = name
        self._ql_daycount = ql_daycount

    def year_fraction(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> float:
        """Calculate year fraction between two dates using QuantLib."""
        ql_start = _to_ql_date(start)
        ql_end = _to_ql_date(end)
        return self._ql_daycount.yearFraction(ql_start, ql_end)

    def relative_year_fraction(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> float:
        """Signed year fraction, negative when ``end`` is before ``start``.

        Curve times are measured this way from the curve valuation date, so a
        date in the past maps to a negative time.
        """
        if to_date(end) < to_date(start):
            return -self.year_fraction(end, start)
        return self.year_fraction(start, end)

    def day_count(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> int:
        """Calculate number of days between two dates."""
        ql_start = _to_ql_date(start)
        ql_end = _to_ql_date(end)
        return self._ql_daycount.dayCount(ql_start, ql_end)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DayCountConvention):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Actual360(DayCountConvention):
    """ACT/360 day count convention.

    Standard accrual convention for CDS premium legs.
    """

    def __init__(self):
        super().__init__("ACT/360", ql.Actual360())


class Actual365Fixed(DayCountConvention):
    """ACT/365F (ACT/365 Fixed) day count convention.

    Time basis of ISDA-compliant yield and credit curves.
    """

    def __init__(self):
        super().__init__("ACT/365F", ql.Actual365Fixed())


class Thirty360European(DayCountConvention):
    """30E/360 (30/360 European) day count convention."""

    def __init__(self):
        super().__init__("30E/360", ql.Thirty360(ql.Thirty360.European))


class ActualActualISDA(DayCountConvention):
    """ACT/ACT ISDA day count convention."""

    def __init__(self):
        super().__init__("ACT/ACT", ql.ActualActual(ql.ActualActual.ISDA))


# Pre-defined day count convention instances
ACT_360 = Actual360()
ACT_365F = Actual365Fixed()
THIRTY_360E = Thirty360European()
ACT_ACT = ActualActualISDA()

# Registry
DAY_COUNT_CONVENTIONS = {
    "ACT/360": ACT_360,
    "ACTUAL/360": ACT_360,
    "ACT/365F": ACT_365F,
    "ACT/365": ACT_365F,
    "ACTUAL/365F": ACT_365F,
    "30E/360": THIRTY_360E,
    "30/360E": THIRTY_360E,
    "30/360 EUROPEAN": THIRTY_360E,
    "ACT/ACT": ACT_ACT,
    "ACTUAL/ACTUAL": ACT_ACT,
    "ACT/ACT ISDA": ACT_ACT,
}


def get_day_count_convention(name: str) -> DayCountConvention:
    """Get a day count convention by name."""
    name_upper = name.upper()
    if name_upper not in DAY_COUNT_CONVENTIONS:
        raise ValueError(
            f"Unknown day count convention: {name}. "
            f"Available: {list(DAY_COUNT_CONVENTIONS.keys())}"
        )
    return DAY_COUNT_CONVENTIONS[name_upper]
