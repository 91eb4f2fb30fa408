"""
Base classes for curve interpolation methods.
"""
from abc import ABC, abstractmethod
from typing import List

import numpy as np


class Interpolator(ABC):
    """Base class for curve interpolation methods."""

    def __init__(self, pillars: List[float], values: List[float]):
        """
        Initialize interpolator.

        Args:
            pillars: Time to maturity points (in years), strictly increasing
            values: Values to interpolate (zero rates)
        """
        if len(pillars) != len(values):
            raise ValueError("Pillars and values must have same length")
        if len(pillars) < 1:
            raise ValueError("Need at least 1 point for interpolation")

        pillars_arr = np.asarray(pillars, dtype=float)
        if np.any(np.diff(pillars_arr) <= 0):
            if len(np.unique(pillars_arr)) != len(pillars_arr):
                raise ValueError("Duplicate pillars not allowed")
            raise ValueError("Pillars must be sorted in increasing order")

        self.pillars = pillars_arr
        self.values = np.asarray(values, dtype=float)
        self.pillars.setflags(write=False)
        self.values.setflags(write=False)

    @property
    def size(self) -> int:
        return len(self.pillars)

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Interpolate value at time t."""
        pass

    @abstractmethod
    def parameter_sensitivity(self, t: float) -> np.ndarray:
        """Derivative of the interpolated value at t with respect to each node value."""
        pass
