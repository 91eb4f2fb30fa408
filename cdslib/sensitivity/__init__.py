"""
Curve sensitivities.

Point sensitivities are produced by the pricers on zero rates at arbitrary
times; the provider maps them onto curve nodes as parameter sensitivities.
"""

from .finite_difference import FiniteDifferenceCalculator
from .parameter import CurveParameterSensitivities, CurveParameterSensitivity
from .point import (
    CreditCurveZeroRateSensitivity,
    PointSensitivities,
    ZeroRateSensitivity,
)

__all__ = [
    "FiniteDifferenceCalculator",
    "CurveParameterSensitivities",
    "CurveParameterSensitivity",
    "CreditCurveZeroRateSensitivity",
    "PointSensitivities",
    "ZeroRateSensitivity",
]
