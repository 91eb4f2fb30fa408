"""Shared market data and products for the CDS pricer tests.

Curves and trades are anchored at 2014-01-03 with ACT/365F yield and credit
curves and a constant 25% recovery.
"""

from dataclasses import replace
from datetime import date

import numpy as np
import pytest

from cdslib.conventions import (
    ACT_360,
    ACT_365F,
    BusinessDayConvention,
    BuySell,
    Frequency,
    PaymentOnDefault,
    ProtectionStartOfDay,
    ReferenceData,
    StubConvention,
)
from cdslib.curves import (
    ConstantRecoveryRates,
    CreditRatesProvider,
    IsdaCreditDiscountFactors,
)
from cdslib.product import Cds
from cdslib.schedule import BusinessDayAdjustment, DaysAdjustment, PeriodicSchedule

REF_DATA = ReferenceData.standard()
VALUATION_DATE = date(2014, 1, 3)
CALENDAR = "SAT_SUN"
LEGAL_ENTITY = "OG~ABC"
USD = "USD"
NOTIONAL = 1.0e7
RECOVERY_RATE = 0.25

TIME_YC = np.array([
    0.09041095890410959, 0.16712328767123288, 0.2547945205479452, 0.5041095890410959,
    0.7534246575342466, 1.0054794520547945, 2.0054794520547947, 3.008219178082192,
    4.013698630136987, 5.010958904109589, 6.008219178082192, 7.010958904109589,
    8.01095890410959, 9.01095890410959, 10.016438356164384, 12.013698630136986,
    15.021917808219179, 20.01917808219178, 30.024657534246575,
])
RATE_YC = np.array([
    -0.002078655697855299, -0.001686438401304855, -0.0013445486228483379,
    -4.237819925898475e-4, 2.5142499469348057e-5, 5.935063895780138e-4,
    -3.247081037469503e-4, 6.147182786549223e-4, 0.0019060597240545122,
    0.0033125742254568815, 0.0047766352312329455, 0.0062374324537341225,
    0.007639664176639106, 0.008971003650150983, 0.010167545380711455,
    0.012196853322376243, 0.01441082634734099, 0.016236611610989507,
    0.01652439910865982,
])
TIME_CC = np.array([
    1.2054794520547945, 1.7095890410958905, 2.712328767123288, 3.712328767123288,
    4.712328767123288, 5.712328767123288, 7.715068493150685, 10.717808219178082,
])
RATE_CC = np.array([
    0.009950492020354761, 0.01203385973637765, 0.01418821591480718,
    0.01684815168721049, 0.01974873350586718, 0.023084203422383043,
    0.02696911931489543, 0.029605642651816415,
])


def create_provider(
    valuation_date: date,
    time_yc=TIME_YC,
    rate_yc=RATE_YC,
    time_cc=TIME_CC,
    rate_cc=RATE_CC,
) -> CreditRatesProvider:
    """Provider with the given node times and rates anchored at valuation_date."""
    yield_curve = IsdaCreditDiscountFactors.of(
        USD, valuation_date, time_yc, rate_yc, ACT_365F, name="yield"
    )
    credit_curve = IsdaCreditDiscountFactors.of(
        USD, valuation_date, time_cc, rate_cc, ACT_365F, name="credit"
    )
    return CreditRatesProvider(
        valuation_date,
        credit_curves={(LEGAL_ENTITY, USD): credit_curve},
        discount_curves={USD: yield_curve},
        recovery_rates={
            LEGAL_ENTITY: ConstantRecoveryRates.of(LEGAL_ENTITY, valuation_date, RECOVERY_RATE)
        },
    )


def standard_cds(buy_sell: BuySell, start: date, end: date) -> Cds:
    return Cds.of(
        buy_sell, LEGAL_ENTITY, USD, NOTIONAL, start, end, Frequency.P3M, CALENDAR, 0.05
    )


def non_standard_cds(
    buy_sell: BuySell,
    start: date,
    end: date,
    frequency: Frequency,
    stub_convention: StubConvention,
) -> Cds:
    schedule = PeriodicSchedule(
        start_date=start,
        end_date=end,
        frequency=frequency,
        business_day_adjustment=BusinessDayAdjustment.of(
            BusinessDayConvention.FOLLOWING, CALENDAR
        ),
        stub_convention=stub_convention,
        start_date_business_day_adjustment=BusinessDayAdjustment.NONE,
        end_date_business_day_adjustment=BusinessDayAdjustment.NONE,
    )
    return Cds(
        buy_sell=buy_sell,
        legal_entity_id=LEGAL_ENTITY,
        currency=USD,
        notional=NOTIONAL,
        payment_schedule=schedule,
        fixed_rate=0.05,
        day_count=ACT_360,
        payment_on_default=PaymentOnDefault.ACCRUED_PREMIUM,
        protection_start=ProtectionStartOfDay.NONE,
        step_in_date_offset=DaysAdjustment.of_calendar_days(7),
        settlement_date_offset=DaysAdjustment.of_business_days(5, CALENDAR),
    )


def settlement_date(product, provider) -> date:
    return product.settlement_date_offset.adjust(provider.valuation_date, REF_DATA)


@pytest.fixture(scope="module")
def ref_data():
    return REF_DATA


@pytest.fixture(scope="module")
def provider():
    return create_provider(VALUATION_DATE)


@pytest.fixture(scope="module")
def product_nextday():
    return standard_cds(BuySell.BUY, date(2014, 1, 4), date(2020, 10, 20)).resolve(REF_DATA)


@pytest.fixture(scope="module")
def product_nextday_none():
    cds = standard_cds(BuySell.BUY, date(2014, 1, 4), date(2020, 10, 20))
    return replace(cds, protection_start=ProtectionStartOfDay.NONE).resolve(REF_DATA)


@pytest.fixture(scope="module")
def product_before():
    return standard_cds(BuySell.SELL, date(2013, 12, 20), date(2024, 9, 20)).resolve(REF_DATA)


@pytest.fixture(scope="module")
def product_after():
    return standard_cds(BuySell.BUY, date(2014, 3, 20), date(2029, 12, 20)).resolve(REF_DATA)


@pytest.fixture(scope="module")
def product_ns_today():
    return non_standard_cds(
        BuySell.BUY,
        VALUATION_DATE,
        date(2021, 4, 25),
        Frequency.P4M,
        StubConvention.SHORT_FINAL,
    ).resolve(REF_DATA)


@pytest.fixture(scope="module")
def product_ns_stepin():
    start = DaysAdjustment.of_calendar_days(7).adjust(VALUATION_DATE, REF_DATA)
    return non_standard_cds(
        BuySell.SELL,
        start,
        date(2019, 1, 26),
        Frequency.P6M,
        StubConvention.LONG_INITIAL,
    ).resolve(REF_DATA)


@pytest.fixture(scope="module")
def product_ns_btw():
    return non_standard_cds(
        BuySell.BUY,
        date(2014, 1, 7),
        date(2026, 8, 2),
        Frequency.P12M,
        StubConvention.LONG_FINAL,
    ).resolve(REF_DATA)
