"""
Date truncation rules deciding which parts of a CDS still carry value.

Three dates drive the decisions: the valuation date of the market data, the
step-in date (valuation date plus the step-in offset) and the effective
start date derived from it. The pricer's reference date only anchors
discounting and plays no part here.
"""

from datetime import date
from enum import Enum
from typing import Optional, Tuple

from cdslib.product.resolved import CreditCouponPaymentPeriod, ResolvedCds


class PeriodStatus(Enum):
    """Whether a coupon period's premium is still owed to the holder."""

    INCLUDED = "INCLUDED"
    EXCLUDED = "EXCLUDED"


def is_expired(product: ResolvedCds, valuation_date: date) -> bool:
    """A CDS whose protection has ended on or before the valuation date has no value."""
    return product.protection_end_date <= valuation_date


def period_status(period: CreditCouponPaymentPeriod, stepin_date: date) -> PeriodStatus:
    """Coupons of periods ending on or before the step-in date are excluded."""
    if stepin_date < period.end_date:
        return PeriodStatus.INCLUDED
    return PeriodStatus.EXCLUDED


def accrual_on_default_window(
    period: CreditCouponPaymentPeriod, effective_start_date: date
) -> Optional[Tuple[date, date]]:
    """Part of the period still exposed to accrual on default, if any."""
    start = max(period.effective_start_date, effective_start_date)
    if start >= period.effective_end_date:
        return None
    return start, period.effective_end_date


def accrual_on_default_start(product: ResolvedCds, effective_start_date: date) -> date:
    """Start of the integration schedule shared by all periods' accrual on default.

    Multi-period products integrate from the accrual start so that the knots
    match the ISDA model when the Markit fix is used.
    """
    if len(product.payment_periods) == 1:
        return effective_start_date
    return product.accrual_start_date
