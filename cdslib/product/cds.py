"""
Single-name CDS definition and its resolution into coupon periods.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional

from cdslib.conventions.daycount import ACT_360, DayCountConvention
from cdslib.conventions.reference_data import ReferenceData
from cdslib.conventions.types import (
    BusinessDayConvention,
    BuySell,
    Frequency,
    PaymentOnDefault,
    ProtectionStartOfDay,
    StubConvention,
)
from cdslib.schedule.adjustments import BusinessDayAdjustment, DaysAdjustment
from cdslib.schedule.generator import PeriodicSchedule

from .resolved import CreditCouponPaymentPeriod, ResolvedCds, ResolvedCdsTrade

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cds:
    """Single-name credit default swap.

    The protection buyer pays ``fixed_rate`` on ``notional`` over the premium
    schedule and receives ``1 - recovery`` on default of the legal entity.
    """

    buy_sell: BuySell
    legal_entity_id: str
    currency: str
    notional: float
    payment_schedule: PeriodicSchedule
    fixed_rate: float
    day_count: DayCountConvention = ACT_360
    payment_on_default: PaymentOnDefault = PaymentOnDefault.ACCRUED_PREMIUM
    protection_start: ProtectionStartOfDay = ProtectionStartOfDay.BEGINNING
    step_in_date_offset: DaysAdjustment = field(
        default_factory=lambda: DaysAdjustment.of_calendar_days(1)
    )
    settlement_date_offset: Optional[DaysAdjustment] = None

    def __post_init__(self):
        if self.notional < 0:
            raise ValueError(f"Notional must not be negative, got {self.notional}")
        if self.settlement_date_offset is None:
            object.__setattr__(
                self,
                "settlement_date_offset",
                DaysAdjustment.of_business_days(3, self.payment_schedule.calendar),
            )

    @classmethod
    def of(
        cls,
        buy_sell: BuySell,
        legal_entity_id: str,
        currency: str,
        notional: float,
        start_date: date,
        end_date: date,
        frequency: Frequency,
        calendar: str,
        fixed_rate: float,
    ) -> "Cds":
        """Standard contract: FOLLOWING on the calendar with unadjusted start and end dates."""
        schedule = PeriodicSchedule(
            start_date=start_date,
            end_date=end_date,
            frequency=frequency,
            business_day_adjustment=BusinessDayAdjustment(
                BusinessDayConvention.FOLLOWING, calendar
            ),
            stub_convention=StubConvention.SMART_INITIAL,
            start_date_business_day_adjustment=BusinessDayAdjustment.NONE,
            end_date_business_day_adjustment=BusinessDayAdjustment.NONE,
        )
        return cls(
            buy_sell=buy_sell,
            legal_entity_id=legal_entity_id,
            currency=currency,
            notional=notional,
            payment_schedule=schedule,
            fixed_rate=fixed_rate,
        )

    def resolve(self, ref_data: ReferenceData) -> ResolvedCds:
        schedule = self.payment_schedule.create_schedule(ref_data)
        beginning = self.protection_start.is_beginning()
        one_day = timedelta(days=1)

        periods: List[CreditCouponPaymentPeriod] = []
        for period in schedule.periods[:-1]:
            periods.append(
                CreditCouponPaymentPeriod(
                    currency=self.currency,
                    notional=self.notional,
                    start_date=period.start_date,
                    end_date=period.end_date,
                    unadjusted_start_date=period.unadjusted_start_date,
                    unadjusted_end_date=period.unadjusted_end_date,
                    effective_start_date=period.start_date - one_day if beginning else period.start_date,
                    effective_end_date=period.end_date - one_day if beginning else period.end_date,
                    payment_date=period.end_date,
                    fixed_rate=self.fixed_rate,
                    year_fraction=period.year_fraction(self.day_count),
                )
            )

        # Final accrual runs to the end of the last protected day
        last = schedule.last_period
        accrual_end = last.end_date + one_day if beginning else last.end_date
        payment_date = self.payment_schedule.business_day_adjustment.adjust(
            last.end_date, ref_data
        )
        periods.append(
            CreditCouponPaymentPeriod(
                currency=self.currency,
                notional=self.notional,
                start_date=last.start_date,
                end_date=accrual_end,
                unadjusted_start_date=last.unadjusted_start_date,
                unadjusted_end_date=last.unadjusted_end_date,
                effective_start_date=last.start_date - one_day if beginning else last.start_date,
                effective_end_date=accrual_end - one_day if beginning else accrual_end,
                payment_date=payment_date,
                fixed_rate=self.fixed_rate,
                year_fraction=self.day_count.year_fraction(last.start_date, accrual_end),
            )
        )

        logger.debug(
            "Resolved CDS on %s with %d periods, protection end %s",
            self.legal_entity_id,
            len(periods),
            last.end_date,
        )
        return ResolvedCds(
            buy_sell=self.buy_sell,
            legal_entity_id=self.legal_entity_id,
            currency=self.currency,
            notional=self.notional,
            payment_periods=tuple(periods),
            protection_end_date=last.end_date,
            day_count=self.day_count,
            payment_on_default=self.payment_on_default,
            protection_start=self.protection_start,
            step_in_date_offset=self.step_in_date_offset,
            settlement_date_offset=self.settlement_date_offset,
            fixed_rate=self.fixed_rate,
        )

    def resolve_trade(
        self,
        ref_data: ReferenceData,
        trade_date: Optional[date] = None,
        settlement_date: Optional[date] = None,
    ) -> ResolvedCdsTrade:
        return ResolvedCdsTrade(self.resolve(ref_data), trade_date, settlement_date)
