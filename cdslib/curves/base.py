"""
Base classes for credit discount factor curves.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Union

import numpy as np

from cdslib.conventions.daycount import DayCountConvention

DateOrTime = Union[date, datetime, float]


class CreditDiscountFactors(ABC):
    """Discount factors, or survival probabilities, on a zero-rate curve.

    The same curve type serves both purposes: a yield curve gives discount
    factors, a credit curve gives survival probabilities. Times are year
    fractions from ``valuation_date`` under ``day_count``.
    """

    def __init__(
        self,
        currency: str,
        valuation_date: date,
        day_count: DayCountConvention,
        name: str = "",
    ):
        self.currency = currency
        self.valuation_date = valuation_date
        self.day_count = day_count
        self.name = name

    @property
    def is_isda_compliant(self) -> bool:
        """Whether the curve follows the ISDA standard model interpolation."""
        return False

    def relative_year_fraction(self, dt: Union[date, datetime]) -> float:
        """Convert a date to the curve's signed year fraction basis."""
        if isinstance(dt, datetime):
            dt = dt.date()
        return self.day_count.relative_year_fraction(self.valuation_date, dt)

    def _to_year_fraction(self, t: DateOrTime) -> float:
        if isinstance(t, (int, float, np.floating)):
            return float(t)
        return self.relative_year_fraction(t)

    @property
    @abstractmethod
    def parameter_keys(self) -> np.ndarray:
        """Node times of the curve."""
        pass

    @abstractmethod
    def zero_rate(self, t: DateOrTime) -> float:
        """Continuously compounded zero rate at a date or year fraction."""
        pass

    def discount_factor(self, t: DateOrTime) -> float:
        yf = self._to_year_fraction(t)
        return float(np.exp(-yf * self.zero_rate(yf)))

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.name or self.currency})"
