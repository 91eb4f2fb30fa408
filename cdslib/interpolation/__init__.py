"""Interpolation methods for zero curves."""

from .base import Interpolator
from .product_linear import ProductLinearInterpolator

__all__ = [
    "Interpolator",
    "ProductLinearInterpolator",
]
