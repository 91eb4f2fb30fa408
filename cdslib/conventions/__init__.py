"""
Market conventions: day counts, holiday calendars and trade enums.
"""

from .calendars import (
    CALENDARS,
    GBLO,
    NO_HOLIDAYS,
    SAT_SUN,
    TARGET,
    USNY,
    Calendar,
    get_calendar,
)
from .daycount import (
    ACT_360,
    ACT_365F,
    ACT_ACT,
    DAY_COUNT_CONVENTIONS,
    THIRTY_360E,
    DayCountConvention,
    get_day_count_convention,
)
from .reference_data import ReferenceData
from .types import (
    BusinessDayConvention,
    BuySell,
    Frequency,
    PaymentOnDefault,
    PriceType,
    ProtectionStartOfDay,
    StubConvention,
)

__all__ = [
    "CALENDARS",
    "GBLO",
    "NO_HOLIDAYS",
    "SAT_SUN",
    "TARGET",
    "USNY",
    "Calendar",
    "get_calendar",
    "ACT_360",
    "ACT_365F",
    "ACT_ACT",
    "DAY_COUNT_CONVENTIONS",
    "THIRTY_360E",
    "DayCountConvention",
    "get_day_count_convention",
    "ReferenceData",
    "BusinessDayConvention",
    "BuySell",
    "Frequency",
    "PaymentOnDefault",
    "PriceType",
    "ProtectionStartOfDay",
    "StubConvention",
]
