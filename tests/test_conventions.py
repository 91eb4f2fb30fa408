from datetime import date

import pytest

from cdslib.conventions import (
    ACT_360,
    ACT_365F,
    THIRTY_360E,
    BuySell,
    PaymentOnDefault,
    PriceType,
    ProtectionStartOfDay,
    ReferenceData,
    get_calendar,
    get_day_count_convention,
)
from cdslib.conventions.calendars import SAT_SUN


def test_year_fractions():
    start, end = date(2014, 1, 20), date(2014, 4, 21)
    assert ACT_360.year_fraction(start, end) == pytest.approx(91 / 360, abs=1e-15)
    assert ACT_365F.year_fraction(start, end) == pytest.approx(91 / 365, abs=1e-15)
    assert THIRTY_360E.year_fraction(date(2014, 1, 31), date(2014, 3, 31)) == pytest.approx(
        60 / 360
    )
    assert ACT_360.day_count(start, end) == 91


def test_relative_year_fraction_sign():
    assert ACT_365F.relative_year_fraction(date(2014, 1, 3), date(2013, 1, 3)) == pytest.approx(-1.0)
    assert ACT_365F.relative_year_fraction(date(2014, 1, 3), date(2014, 1, 3)) == 0.0


def test_day_count_registry():
    assert get_day_count_convention("act/365f") is ACT_365F
    assert get_day_count_convention("ACTUAL/360") == ACT_360
    with pytest.raises(ValueError, match="Unknown day count"):
        get_day_count_convention("BUS/252")


def test_calendar_registry():
    assert get_calendar("weekend") is SAT_SUN
    assert not SAT_SUN.is_business_day(date(2014, 1, 4))
    assert SAT_SUN.is_holiday(date(2014, 1, 5))
    assert SAT_SUN.add_business_days(date(2014, 1, 3), 5) == date(2014, 1, 10)
    with pytest.raises(ValueError, match="Unknown calendar"):
        get_calendar("MARS")


def test_reference_data():
    ref_data = ReferenceData.standard()
    assert "sat_sun" in ref_data
    assert ref_data.calendar("USNY").name == "USNY"
    custom = ReferenceData().with_calendar("XCAL", SAT_SUN)
    assert custom.calendar("xcal") is SAT_SUN
    with pytest.raises(ValueError):
        custom.calendar("USNY")


def test_enums():
    assert BuySell.BUY.normalize(-5.0) == 5.0
    assert BuySell.SELL.normalize(5.0) == -5.0
    assert BuySell.BUY.is_buy()
    assert PriceType.CLEAN.is_clean()
    assert not PriceType.DIRTY.is_clean()
    assert PaymentOnDefault.ACCRUED_PREMIUM.is_accrued_interest()
    assert ProtectionStartOfDay.BEGINNING.is_beginning()
    assert not ProtectionStartOfDay.NONE.is_beginning()
