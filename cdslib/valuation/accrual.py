"""
Accrual-on-default kernels.

When the reference entity defaults mid-period, the protection buyer owes the
premium accrued since the period start. The expected value of that payment
is integrated piecewise over the knots of both curves. The three supported
formulas differ only in the closed form used on each sub-interval:

* ``ORIGINAL_ISDA``: ISDA standard model up to v1.8.2, with a half-day bias
  ``omega = 1/730`` added to the accrual time.
* ``MARKIT_FIX``: the fix proposed by Markit in the v1.8.2 comments.
* ``CORRECT``: the mathematically exact integral.

Each kernel also provides the adjoint of its sub-interval formula, which the
risky annuity sensitivity uses to propagate derivatives to the curve nodes.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import date
from enum import Enum
from typing import List, Sequence, Tuple

from cdslib.curves.base import CreditDiscountFactors
from cdslib.curves.isda import LegalEntitySurvivalProbabilities
from cdslib.product.resolved import CreditCouponPaymentPeriod
from cdslib.sensitivity.point import PointSensitivities

from .epsilon import SMALL, epsilon, epsilon_p, epsilon_pp
from .integration import truncate_set_inclusive
from .truncation import accrual_on_default_window

# value, d/d(dht), d/d(dhrt), d/d(b0), d/d(b1)
SegmentAdjoint = Tuple[float, float, float, float, float]


class AccrualOnDefaultKernel(ABC):
    """Integrates the accrued premium paid on default over one coupon period."""

    def __init__(self, omega: float):
        self.omega = omega

    @abstractmethod
    def segment(
        self, dht: float, dhrt: float, dt: float, b0: float, b1: float, t0: float, t1: float
    ) -> float:
        """Contribution of one sub-interval.

        Args:
            dht: Increase of hazard-time ``h(t) * t`` over the sub-interval
            dhrt: Increase of hazard-time plus rate-time over the sub-interval
            dt: Length of the sub-interval
            b0: Risky discount factor at the start of the sub-interval
            b1: Risky discount factor at the end of the sub-interval
            t0: Accrual time at the start of the sub-interval
            t1: Accrual time at the end of the sub-interval
        """

    @abstractmethod
    def segment_adjoint(
        self, dht: float, dhrt: float, dt: float, b0: float, b1: float, t0: float, t1: float
    ) -> SegmentAdjoint:
        """Contribution of one sub-interval and its partial derivatives."""

    def _knots(
        self,
        period: CreditCouponPaymentPeriod,
        effective_start_date: date,
        integration_schedule: Sequence[float],
        discount_factors: CreditDiscountFactors,
    ):
        window = accrual_on_default_window(period, effective_start_date)
        if window is None:
            return None
        start, end = window
        return truncate_set_inclusive(
            discount_factors.relative_year_fraction(start),
            discount_factors.relative_year_fraction(end),
            integration_schedule,
        )

    def _year_fraction_ratio(
        self, period: CreditCouponPaymentPeriod, discount_factors: CreditDiscountFactors
    ) -> float:
        curve_year_fraction = discount_factors.day_count.relative_year_fraction(
            period.start_date, period.end_date
        )
        return period.year_fraction / curve_year_fraction

    def accrued_on_default(
        self,
        period: CreditCouponPaymentPeriod,
        effective_start_date: date,
        integration_schedule: Sequence[float],
        discount_factors: CreditDiscountFactors,
        survival_probabilities: LegalEntitySurvivalProbabilities,
    ) -> float:
        """Accrual-on-default value of one period per unit notional, undiscounted to the reference date."""
        knots = self._knots(period, effective_start_date, integration_schedule, discount_factors)
        if knots is None:
            return 0.0

        t = knots[0]
        ht0 = survival_probabilities.zero_rate(t) * t
        rt0 = discount_factors.zero_rate(t) * t
        b0 = math.exp(-rt0 - ht0)

        eff_start = discount_factors.relative_year_fraction(period.effective_start_date)
        t0 = t - eff_start + self.omega
        pv = 0.0
        for j in range(1, len(knots)):
            t = knots[j]
            ht1 = survival_probabilities.zero_rate(t) * t
            rt1 = discount_factors.zero_rate(t) * t
            b1 = math.exp(-rt1 - ht1)
            dt = knots[j] - knots[j - 1]
            dht = ht1 - ht0
            dhrt = dht + (rt1 - rt0)
            t1 = t - eff_start + self.omega

            pv += self.segment(dht, dhrt, dt, b0, b1, t0, t1)
            t0 = t1
            ht0 = ht1
            rt0 = rt1
            b0 = b1

        return self._year_fraction_ratio(period, discount_factors) * pv

    def accrued_on_default_sensitivity(
        self,
        period: CreditCouponPaymentPeriod,
        effective_start_date: date,
        integration_schedule: Sequence[float],
        discount_factors: CreditDiscountFactors,
        survival_probabilities: LegalEntitySurvivalProbabilities,
    ) -> Tuple[float, PointSensitivities]:
        """Value of ``accrued_on_default`` and its zero-rate point sensitivities."""
        knots = self._knots(period, effective_start_date, integration_schedule, discount_factors)
        if knots is None:
            return 0.0, PointSensitivities.empty()

        n = len(knots)
        dhrt_bar = [0.0] * (n - 1)
        dht_bar = [0.0] * (n - 1)
        b_bar = [0.0] * n
        p = [0.0] * n
        q = [0.0] * n

        t = knots[0]
        ht0 = survival_probabilities.zero_rate(t) * t
        rt0 = discount_factors.zero_rate(t) * t
        q[0] = math.exp(-ht0)
        p[0] = math.exp(-rt0)
        b0 = q[0] * p[0]

        eff_start = discount_factors.relative_year_fraction(period.effective_start_date)
        t0 = t - eff_start + self.omega
        pv = 0.0
        for i in range(1, n):
            t = knots[i]
            ht1 = survival_probabilities.zero_rate(t) * t
            rt1 = discount_factors.zero_rate(t) * t
            q[i] = math.exp(-ht1)
            p[i] = math.exp(-rt1)
            b1 = q[i] * p[i]
            dt = knots[i] - knots[i - 1]
            dht = ht1 - ht0
            dhrt = dht + (rt1 - rt0)
            t1 = t - eff_start + self.omega

            value, dht_bar[i - 1], dhrt_bar[i - 1], b0_bar, b1_bar = self.segment_adjoint(
                dht, dhrt, dt, b0, b1, t0, t1
            )
            b_bar[i - 1] += b0_bar
            b_bar[i] += b1_bar
            pv += value
            t0 = t1
            ht0 = ht1
            rt0 = rt1
            b0 = b1

        ratio = self._year_fraction_ratio(period, discount_factors)
        points: List = [
            discount_factors.zero_rate_point_sensitivity(knots[0]).multiplied_by(
                ratio * (dhrt_bar[0] / p[0] + b_bar[0] * q[0])
            ),
            survival_probabilities.zero_rate_point_sensitivity(knots[0]).multiplied_by(
                ratio * ((dhrt_bar[0] + dht_bar[0]) / q[0] + b_bar[0] * p[0])
            ),
        ]
        for i in range(1, n - 1):
            points.append(
                discount_factors.zero_rate_point_sensitivity(knots[i]).multiplied_by(
                    ratio * (-dhrt_bar[i - 1] / p[i] + dhrt_bar[i] / p[i] + b_bar[i] * q[i])
                )
            )
            points.append(
                survival_probabilities.zero_rate_point_sensitivity(knots[i]).multiplied_by(
                    ratio
                    * (
                        -(dhrt_bar[i - 1] + dht_bar[i - 1]) / q[i]
                        + (dhrt_bar[i] + dht_bar[i]) / q[i]
                        + b_bar[i] * p[i]
                    )
                )
            )
        if n > 1:
            last = n - 1
            points.append(
                discount_factors.zero_rate_point_sensitivity(knots[last]).multiplied_by(
                    ratio * (-dhrt_bar[last - 1] / p[last] + b_bar[last] * q[last])
                )
            )
            points.append(
                survival_probabilities.zero_rate_point_sensitivity(knots[last]).multiplied_by(
                    ratio
                    * (-(dhrt_bar[last - 1] + dht_bar[last - 1]) / q[last] + b_bar[last] * p[last])
                )
            )

        return ratio * pv, PointSensitivities(points)


class AccrualTimeKernel(AccrualOnDefaultKernel):
    """Kernel integrating the accrual time exactly over each sub-interval.

    With ``omega = 0`` this is the correct formula; with ``omega = 1/730``
    it reproduces the original ISDA model.
    """

    def segment(self, dht, dhrt, dt, b0, b1, t0, t1):
        if abs(dhrt) < SMALL:
            return dht * b0 * (t0 * epsilon(-dhrt) + dt * epsilon_p(-dhrt))
        return dht / dhrt * (t0 * b0 - t1 * b1 + dt / dhrt * (b0 - b1))

    def segment_adjoint(self, dht, dhrt, dt, b0, b1, t0, t1):
        if abs(dhrt) < SMALL:
            eps = epsilon(-dhrt)
            epsp = epsilon_p(-dhrt)
            value = dht * b0 * (t0 * eps + dt * epsp)
            dht_bar = b0 * (t0 * eps + dt * epsp)
            dhrt_bar = -dht * b0 * (t0 * epsp + dt * epsilon_pp(-dhrt))
            return value, dht_bar, dhrt_bar, dht * (t0 * eps + dt * epsp), 0.0

        value = dht / dhrt * (t0 * b0 - t1 * b1 + dt / dhrt * (b0 - b1))
        dht_bar = (t0 * b0 - t1 * b1 + dt / dhrt * (b0 - b1)) / dhrt
        dhrt_bar = dht / (dhrt * dhrt) * (-2.0 * dt / dhrt * (b0 - b1) - t0 * b0 + t1 * b1)
        b0_bar = dht / dhrt * (t0 + dt / dhrt)
        b1_bar = dht / dhrt * (-t1 - dt / dhrt)
        return value, dht_bar, dhrt_bar, b0_bar, b1_bar


class MarkitFixKernel(AccrualOnDefaultKernel):
    """Kernel of the Markit fix, which drops the accrual time at the sub-interval start."""

    def __init__(self):
        super().__init__(0.0)

    def segment(self, dht, dhrt, dt, b0, b1, t0, t1):
        if abs(dhrt) < SMALL:
            return dht * dt * b0 * epsilon_p(-dhrt)
        return dht * dt / dhrt * ((b0 - b1) / dhrt - b1)

    def segment_adjoint(self, dht, dhrt, dt, b0, b1, t0, t1):
        if abs(dhrt) < SMALL:
            eps = epsilon_p(-dhrt)
            value = dht * dt * b0 * eps
            dht_bar = dt * b0 * eps
            dhrt_bar = -dht * dt * b0 * epsilon_pp(-dhrt)
            return value, dht_bar, dhrt_bar, dht * eps, 0.0

        value = dht * dt / dhrt * ((b0 - b1) / dhrt - b1)
        dht_bar = dt / dhrt * ((b0 - b1) / dhrt - b1)
        dhrt_bar = dht * dt / (dhrt * dhrt) * (b1 - 2.0 * (b0 - b1) / dhrt)
        b0_bar = dht * dt / (dhrt * dhrt)
        b1_bar = -dht * dt / dhrt * (1.0 + 1.0 / dhrt)
        return value, dht_bar, dhrt_bar, b0_bar, b1_bar


class AccrualOnDefaultFormula(Enum):
    """Formula for the accrual-on-default part of the risky annuity."""

    ORIGINAL_ISDA = "ORIGINAL_ISDA"
    MARKIT_FIX = "MARKIT_FIX"
    CORRECT = "CORRECT"

    @property
    def omega(self) -> float:
        if self is AccrualOnDefaultFormula.ORIGINAL_ISDA:
            return 1.0 / 730.0
        return 0.0

    def kernel(self) -> AccrualOnDefaultKernel:
        if self is AccrualOnDefaultFormula.MARKIT_FIX:
            return MarkitFixKernel()
        return AccrualTimeKernel(self.omega)
