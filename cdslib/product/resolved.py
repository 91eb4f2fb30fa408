"""
Resolved CDS products, ready for pricing.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Tuple

from cdslib.conventions.daycount import DayCountConvention
from cdslib.conventions.types import BuySell, PaymentOnDefault, ProtectionStartOfDay
from cdslib.schedule.adjustments import DaysAdjustment


@dataclass(frozen=True)
class CreditCouponPaymentPeriod:
    """A single premium period of a resolved CDS.

    ``effective_start_date`` and ``effective_end_date`` bound the period over
    which protection is accounted. The effective end is also the detachment
    date: survival to that date is required to receive the coupon.
    """

    currency: str
    notional: float
    start_date: date
    end_date: date
    unadjusted_start_date: date
    unadjusted_end_date: date
    effective_start_date: date
    effective_end_date: date
    payment_date: date
    fixed_rate: float
    year_fraction: float

    def __post_init__(self):
        if self.end_date <= self.start_date:
            raise ValueError(
                f"Period end {self.end_date} must be after start {self.start_date}"
            )
        if self.effective_end_date > self.payment_date:
            raise ValueError(
                f"Detachment date {self.effective_end_date} is after "
                f"payment date {self.payment_date}"
            )

    def contains(self, dt: date) -> bool:
        return self.start_date <= dt < self.end_date


@dataclass(frozen=True)
class ResolvedCds:
    """Single-name CDS with its premium schedule fully resolved."""

    buy_sell: BuySell
    legal_entity_id: str
    currency: str
    notional: float
    payment_periods: Tuple[CreditCouponPaymentPeriod, ...]
    protection_end_date: date
    day_count: DayCountConvention
    payment_on_default: PaymentOnDefault
    protection_start: ProtectionStartOfDay
    step_in_date_offset: DaysAdjustment
    settlement_date_offset: DaysAdjustment
    fixed_rate: float

    def __post_init__(self):
        if not self.payment_periods:
            raise ValueError("Resolved CDS must have at least one payment period")
        periods = self.payment_periods
        for prev, nxt in zip(periods[:-1], periods[1:]):
            if nxt.start_date != prev.end_date:
                raise ValueError(
                    f"Payment periods are not contiguous: {prev.end_date} then {nxt.start_date}"
                )
        if self.notional < 0:
            raise ValueError(f"Notional must not be negative, got {self.notional}")

    @property
    def accrual_start_date(self) -> date:
        return self.payment_periods[0].start_date

    @property
    def accrual_end_date(self) -> date:
        return self.payment_periods[-1].end_date

    @property
    def signed_notional(self) -> float:
        return self.buy_sell.normalize(self.notional)

    def calculate_effective_start_date(self, stepin_date: date) -> date:
        """First date protection counts from, given the step-in date."""
        dt = max(stepin_date, self.accrual_start_date)
        if self.protection_start.is_beginning():
            return dt - timedelta(days=1)
        return dt

    def find_period(self, dt: date) -> Optional[CreditCouponPaymentPeriod]:
        for period in self.payment_periods:
            if period.contains(dt):
                return period
        return None

    def accrued_year_fraction(self, stepin_date: date) -> float:
        """Accrued premium at the step-in date, as a year fraction."""
        if stepin_date < self.accrual_start_date:
            return 0.0
        if stepin_date == self.accrual_end_date:
            return self.payment_periods[-1].year_fraction
        period = self.find_period(stepin_date)
        if period is None:
            raise ValueError(
                f"Step-in date {stepin_date} is after accrual end {self.accrual_end_date}"
            )
        return self.day_count.relative_year_fraction(period.start_date, stepin_date)


@dataclass(frozen=True)
class ResolvedCdsTrade:
    """A resolved CDS with optional trade and settlement dates."""

    product: ResolvedCds
    trade_date: Optional[date] = None
    settlement_date: Optional[date] = None
