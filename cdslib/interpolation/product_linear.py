"""
Product-linear interpolation of zero rates.

The interpolated quantity is the zero rate ``r(t)``, but linearity is imposed
on ``r(t) * t``. Discount factors ``exp(-r(t) * t)`` are therefore log-linear
between nodes, i.e. forward rates are piecewise constant. To the left of the
first node the zero rate is held flat; to the right of the last node the
final segment is extended.
"""

from typing import List

import numpy as np

from .base import Interpolator


class ProductLinearInterpolator(Interpolator):
    """Zero-rate interpolator linear in ``r(t) * t``."""

    def __init__(self, pillars: List[float], values: List[float]):
        super().__init__(pillars, values)
        if self.pillars[0] <= 0:
            raise ValueError(
                f"Pillars must be positive, first pillar is {self.pillars[0]}"
            )

    def _segment(self, t: float) -> int:
        """Index of the right node of the segment used for t."""
        index = int(np.searchsorted(self.pillars, t, side="right"))
        return min(index, self.size - 1)

    def interpolate(self, t: float) -> float:
        x = self.pillars
        y = self.values
        if self.size == 1 or t <= x[0]:
            return float(y[0])

        index = int(np.searchsorted(x, t))
        if index < self.size and x[index] == t:
            return float(y[index])

        i = self._segment(t)
        x1, x2 = x[i - 1], x[i]
        w = (x2 - t) / (x2 - x1)
        rt = w * (x1 * y[i - 1]) + (1.0 - w) * (x2 * y[i])
        return float(rt / t)

    def parameter_sensitivity(self, t: float) -> np.ndarray:
        x = self.pillars
        result = np.zeros(self.size)
        if self.size == 1 or t <= x[0]:
            result[0] = 1.0
            return result

        index = int(np.searchsorted(x, t))
        if index < self.size and x[index] == t:
            result[index] = 1.0
            return result

        i = self._segment(t)
        x1, x2 = x[i - 1], x[i]
        w = (x2 - t) / (x2 - x1)
        result[i - 1] = w * x1 / t
        result[i] = (1.0 - w) * x2 / t
        return result
