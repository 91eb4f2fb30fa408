"""
Cancellation-free helpers for the closed-form leg integrals.

Each function has a removable singularity at zero. Below ``SMALL`` in
absolute value a Taylor expansion replaces the closed form.
"""

import math

SMALL = 1e-5


def epsilon(x: float) -> float:
    """(exp(x) - 1) / x."""
    if abs(x) > SMALL:
        return math.expm1(x) / x
    return 1.0 + x * (
        1.0 / 2.0
        + x * (1.0 / 6.0 + x * (1.0 / 24.0 + x * (1.0 / 120.0 + x * (1.0 / 720.0 + x / 5040.0))))
    )


def epsilon_p(x: float) -> float:
    """First derivative of ``epsilon``: ((x - 1) * (exp(x) - 1) + x) / x**2."""
    if abs(x) > SMALL:
        return ((x - 1.0) * math.expm1(x) + x) / (x * x)
    return 0.5 + x * (
        1.0 / 3.0
        + x * (0.125 + x * (1.0 / 30.0 + x * (1.0 / 144.0 + x * (1.0 / 840.0 + x / 5760.0))))
    )


def epsilon_pp(x: float) -> float:
    """Second derivative of ``epsilon``."""
    if abs(x) > SMALL:
        x2 = x * x
        return ((x2 - 2.0 * x + 2.0) * math.expm1(x) + x2 - 2.0 * x) / (x2 * x)
    return 1.0 / 3.0 + x * (
        0.25 + x * (0.1 + x * (1.0 / 36.0 + x * (1.0 / 168.0 + x * (1.0 / 960.0 + x / 6480.0))))
    )
