"""
Periodic schedule generation with stub handling.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from cdslib.conventions.reference_data import ReferenceData
from cdslib.conventions.types import Frequency, StubConvention

from .adjustments import BusinessDayAdjustment
from .core import Schedule, SchedulePeriod

logger = logging.getLogger(__name__)


class ScheduleError(ValueError):
    """Raised when a schedule cannot be generated from its definition."""


@dataclass(frozen=True)
class PeriodicSchedule:
    """Definition of a periodic schedule between two unadjusted dates.

    Regular periods are rolled from the end date when the stub convention is
    an initial one, otherwise from the start date. The first and last dates
    may carry their own business day adjustment.
    """

    start_date: date
    end_date: date
    frequency: Frequency
    business_day_adjustment: BusinessDayAdjustment
    stub_convention: StubConvention = StubConvention.NONE
    start_date_business_day_adjustment: Optional[BusinessDayAdjustment] = None
    end_date_business_day_adjustment: Optional[BusinessDayAdjustment] = None

    def __post_init__(self):
        if self.end_date <= self.start_date:
            raise ScheduleError(
                f"Schedule end date {self.end_date} must be after start date {self.start_date}"
            )

    @property
    def calendar(self) -> str:
        return self.business_day_adjustment.calendar

    def _step(self, anchor: date, count: int) -> date:
        # Always rolled from the anchor so month-end clipping does not accumulate
        return anchor + relativedelta(months=count * self.frequency.months())

    def unadjusted_dates(self) -> List[date]:
        if self.stub_convention.is_calculate_backwards():
            return self._generate_backwards()
        return self._generate_forwards()

    def _generate_backwards(self) -> List[date]:
        dates = [self.end_date]
        count = 1
        temp = self._step(self.end_date, -count)
        while temp > self.start_date:
            dates.insert(0, temp)
            count += 1
            temp = self._step(self.end_date, -count)

        stub = temp != self.start_date
        if stub and len(dates) > 1 and self.stub_convention.is_stub_long(
            self.start_date, dates[0]
        ):
            dates.pop(0)
        dates.insert(0, self.start_date)
        return dates

    def _generate_forwards(self) -> List[date]:
        dates = [self.start_date]
        count = 1
        temp = self._step(self.start_date, count)
        while temp < self.end_date:
            dates.append(temp)
            count += 1
            temp = self._step(self.start_date, count)

        stub = temp != self.end_date
        if stub and len(dates) > 1:
            if self.stub_convention == StubConvention.NONE:
                raise ScheduleError(
                    f"Period from {self.start_date} to {self.end_date} does not divide "
                    f"into {self.frequency.name} periods and no stub is allowed"
                )
            if self.stub_convention.is_stub_long(dates[-1], self.end_date):
                dates.pop()
        dates.append(self.end_date)
        return dates

    def adjusted_dates(self, ref_data: ReferenceData) -> List[date]:
        unadjusted = self.unadjusted_dates()
        start_adj = self.start_date_business_day_adjustment or self.business_day_adjustment
        end_adj = self.end_date_business_day_adjustment or self.business_day_adjustment

        adjusted = [start_adj.adjust(unadjusted[0], ref_data)]
        for dt in unadjusted[1:-1]:
            adjusted.append(self.business_day_adjustment.adjust(dt, ref_data))
        adjusted.append(end_adj.adjust(unadjusted[-1], ref_data))
        return adjusted

    def create_schedule(self, ref_data: ReferenceData) -> Schedule:
        """Generate the adjusted schedule."""
        unadjusted = self.unadjusted_dates()
        adjusted = self.adjusted_dates(ref_data)

        periods = []
        for i in range(len(unadjusted) - 1):
            if adjusted[i + 1] <= adjusted[i]:
                raise ScheduleError(
                    f"Adjusted dates {adjusted[i]} and {adjusted[i + 1]} are not increasing"
                )
            periods.append(
                SchedulePeriod(
                    start_date=adjusted[i],
                    end_date=adjusted[i + 1],
                    unadjusted_start_date=unadjusted[i],
                    unadjusted_end_date=unadjusted[i + 1],
                )
            )

        logger.debug(
            "Generated %d periods from %s to %s (%s, %s)",
            len(periods),
            self.start_date,
            self.end_date,
            self.frequency.name,
            self.stub_convention.name,
        )
        return Schedule(tuple(periods), self.frequency)
