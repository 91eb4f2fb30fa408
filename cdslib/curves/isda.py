"""
ISDA-compliant zero-rate curves.

Zero rates are interpolated product-linearly in ``r(t) * t`` over ACT/365F
year fractions, which makes discount factors and survival probabilities
piecewise log-linear. The same class backs both the yield curve and the credit
curve; ``LegalEntitySurvivalProbabilities`` tags a credit curve with its
reference entity.
"""

import logging
from datetime import date
from typing import List, Optional, Union

import numpy as np

from cdslib.conventions.daycount import ACT_365F, DayCountConvention
from cdslib.interpolation.product_linear import ProductLinearInterpolator
from cdslib.sensitivity.point import (
    CreditCurveZeroRateSensitivity,
    ZeroRateSensitivity,
)

from .base import CreditDiscountFactors, DateOrTime

logger = logging.getLogger(__name__)


class IsdaCreditDiscountFactors(CreditDiscountFactors):
    """Zero-rate curve with ISDA standard model interpolation."""

    def __init__(
        self,
        currency: str,
        valuation_date: date,
        times: Union[List[float], np.ndarray],
        zero_rates: Union[List[float], np.ndarray],
        day_count: DayCountConvention = ACT_365F,
        name: str = "",
    ):
        """
        Initialize the curve.

        Args:
            currency: Curve currency
            valuation_date: Date from which node times are measured
            times: Node year fractions, strictly increasing and positive
            zero_rates: Continuously compounded zero rates at the nodes
            day_count: Day count converting dates to year fractions
            name: Optional curve name for identification
        """
        super().__init__(currency, valuation_date, day_count, name)
        self._interpolator = ProductLinearInterpolator(times, zero_rates)

    @classmethod
    def of(
        cls,
        currency: str,
        valuation_date: date,
        times: Union[List[float], np.ndarray],
        zero_rates: Union[List[float], np.ndarray],
        day_count: DayCountConvention = ACT_365F,
        name: str = "",
    ) -> "IsdaCreditDiscountFactors":
        return cls(currency, valuation_date, times, zero_rates, day_count, name)

    @property
    def is_isda_compliant(self) -> bool:
        return True

    @property
    def parameter_keys(self) -> np.ndarray:
        return self._interpolator.pillars

    @property
    def zero_rates(self) -> np.ndarray:
        return self._interpolator.values

    @property
    def parameter_count(self) -> int:
        return self._interpolator.size

    def zero_rate(self, t: DateOrTime) -> float:
        return self._interpolator.interpolate(self._to_year_fraction(t))

    def zero_rate_point_sensitivity(
        self, t: DateOrTime, sensitivity_currency: Optional[str] = None
    ) -> ZeroRateSensitivity:
        """Point sensitivity of the discount factor at t to the zero rate at t."""
        yf = self._to_year_fraction(t)
        df = self.discount_factor(yf)
        return ZeroRateSensitivity(sensitivity_currency or self.currency, yf, -df * yf)

    def zero_rate_parameter_sensitivity(self, year_fraction: float) -> np.ndarray:
        """Derivative of the zero rate at a year fraction with respect to each node rate."""
        return self._interpolator.parameter_sensitivity(year_fraction)

    def with_zero_rates(
        self, zero_rates: Union[List[float], np.ndarray]
    ) -> "IsdaCreditDiscountFactors":
        return IsdaCreditDiscountFactors(
            self.currency,
            self.valuation_date,
            self.parameter_keys,
            zero_rates,
            self.day_count,
            self.name,
        )

    def with_zero_rate(self, index: int, value: float) -> "IsdaCreditDiscountFactors":
        """Return a copy with one node zero rate replaced."""
        rates = np.array(self.zero_rates)
        rates[index] = value
        return self.with_zero_rates(rates)

    def with_valuation_date(self, valuation_date: date) -> "IsdaCreditDiscountFactors":
        """Return a copy anchored at another date with the same node times and rates."""
        return IsdaCreditDiscountFactors(
            self.currency,
            valuation_date,
            self.parameter_keys,
            self.zero_rates,
            self.day_count,
            self.name,
        )

    def __repr__(self) -> str:
        return (
            f"IsdaCreditDiscountFactors(currency={self.currency!r}, "
            f"valuation_date={self.valuation_date}, nodes={self.parameter_count})"
        )


class LegalEntitySurvivalProbabilities:
    """Survival probabilities of a legal entity, backed by an ISDA credit curve."""

    def __init__(self, legal_entity_id: str, survival_probabilities: CreditDiscountFactors):
        self.legal_entity_id = legal_entity_id
        self.survival_probabilities = survival_probabilities
        self._check_monotonic()

    def _check_monotonic(self):
        curve = self.survival_probabilities
        hazard_times = curve.parameter_keys * np.array(
            [curve.zero_rate(t) for t in curve.parameter_keys]
        )
        if np.any(np.diff(hazard_times) < 0):
            logger.warning(
                "Survival probabilities for %s (%s) increase with time; "
                "forward hazard rates are negative",
                self.legal_entity_id,
                curve.currency,
            )

    @property
    def currency(self) -> str:
        return self.survival_probabilities.currency

    @property
    def valuation_date(self) -> date:
        return self.survival_probabilities.valuation_date

    @property
    def day_count(self) -> DayCountConvention:
        return self.survival_probabilities.day_count

    @property
    def parameter_keys(self) -> np.ndarray:
        return self.survival_probabilities.parameter_keys

    def relative_year_fraction(self, dt: date) -> float:
        return self.survival_probabilities.relative_year_fraction(dt)

    def zero_rate(self, t: DateOrTime) -> float:
        return self.survival_probabilities.zero_rate(t)

    def survival_probability(self, t: DateOrTime) -> float:
        return self.survival_probabilities.discount_factor(t)

    def zero_rate_point_sensitivity(
        self, t: DateOrTime, sensitivity_currency: Optional[str] = None
    ) -> CreditCurveZeroRateSensitivity:
        point = self.survival_probabilities.zero_rate_point_sensitivity(
            t, sensitivity_currency
        )
        return CreditCurveZeroRateSensitivity(
            self.legal_entity_id, point.currency, point.year_fraction, point.sensitivity
        )

    def __repr__(self) -> str:
        return (
            f"LegalEntitySurvivalProbabilities({self.legal_entity_id!r}, "
            f"{self.survival_probabilities!r})"
        )
