"""
Protection leg integration.

The protection leg pays ``1 - R`` at default. Between integration points both
curves are log-linear, so the expected discounted default payment has a closed
form on each sub-interval.
"""

import logging
import math
from datetime import date
from typing import List

from cdslib.curves.base import CreditDiscountFactors
from cdslib.curves.isda import LegalEntitySurvivalProbabilities
from cdslib.product.resolved import ResolvedCds
from cdslib.sensitivity.point import PointSensitivities

from .epsilon import SMALL, epsilon
from .integration import integration_points

logger = logging.getLogger(__name__)


def _extended_epsilon(dhrt: float, pn: float, qn: float, pd: float, qd: float) -> float:
    if abs(dhrt) < SMALL:
        return -0.5 - dhrt / 6.0 - dhrt * dhrt / 24.0
    return (1.0 - (pn * qn / (pd * qd) - 1.0) / dhrt) / dhrt


def _protection_schedule(
    product: ResolvedCds,
    discount_factors: CreditDiscountFactors,
    survival_probabilities: LegalEntitySurvivalProbabilities,
    effective_start_date: date,
) -> List[float]:
    if effective_start_date >= product.protection_end_date:
        return []
    return integration_points(
        discount_factors.relative_year_fraction(effective_start_date),
        discount_factors.relative_year_fraction(product.protection_end_date),
        discount_factors.parameter_keys,
        survival_probabilities.parameter_keys,
    )


def protection_full(
    product: ResolvedCds,
    discount_factors: CreditDiscountFactors,
    survival_probabilities: LegalEntitySurvivalProbabilities,
    reference_date: date,
    effective_start_date: date,
) -> float:
    """Protection leg per unit notional before the loss given default is applied.

    Zero when the step-in date leaves no protection to integrate over.
    """
    schedule = _protection_schedule(
        product, discount_factors, survival_probabilities, effective_start_date
    )
    if len(schedule) < 2:
        return 0.0

    pv = 0.0
    t = schedule[0]
    ht0 = survival_probabilities.zero_rate(t) * t
    rt0 = discount_factors.zero_rate(t) * t
    b0 = math.exp(-ht0 - rt0)
    for t in schedule[1:]:
        ht1 = survival_probabilities.zero_rate(t) * t
        rt1 = discount_factors.zero_rate(t) * t
        b1 = math.exp(-ht1 - rt1)
        dht = ht1 - ht0
        dhrt = dht + (rt1 - rt0)
        if abs(dhrt) < SMALL:
            pv += dht * b0 * epsilon(-dhrt)
        else:
            pv += (b0 - b1) * dht / dhrt
        ht0 = ht1
        rt0 = rt1
        b0 = b1

    df = discount_factors.discount_factor(reference_date)
    logger.debug(
        "Protection leg over %d integration points: %s (df=%s)", len(schedule), pv / df, df
    )
    return pv / df


def protection_leg(
    product: ResolvedCds,
    discount_factors: CreditDiscountFactors,
    survival_probabilities: LegalEntitySurvivalProbabilities,
    reference_date: date,
    effective_start_date: date,
    recovery_rate: float,
) -> float:
    """Protection leg per unit notional."""
    full = protection_full(
        product, discount_factors, survival_probabilities, reference_date, effective_start_date
    )
    return (1.0 - recovery_rate) * full


def protection_leg_sensitivity(
    product: ResolvedCds,
    discount_factors: CreditDiscountFactors,
    survival_probabilities: LegalEntitySurvivalProbabilities,
    reference_date: date,
    effective_start_date: date,
    recovery_rate: float,
) -> PointSensitivities:
    """Zero-rate point sensitivities of ``protection_leg``."""
    schedule = _protection_schedule(
        product, discount_factors, survival_probabilities, effective_start_date
    )
    n = len(schedule)
    if n < 2:
        return PointSensitivities.empty()
    dht = [0.0] * (n - 1)
    drt = [0.0] * (n - 1)
    dhrt = [0.0] * (n - 1)
    p = [0.0] * n
    q = [0.0] * n

    pv = 0.0
    t = schedule[0]
    ht0 = survival_probabilities.zero_rate(t) * t
    rt0 = discount_factors.zero_rate(t) * t
    p[0] = math.exp(-rt0)
    q[0] = math.exp(-ht0)
    b0 = p[0] * q[0]
    for i in range(1, n):
        t = schedule[i]
        ht1 = survival_probabilities.zero_rate(t) * t
        rt1 = discount_factors.zero_rate(t) * t
        p[i] = math.exp(-rt1)
        q[i] = math.exp(-ht1)
        b1 = p[i] * q[i]
        dht[i - 1] = ht1 - ht0
        drt[i - 1] = rt1 - rt0
        dhrt[i - 1] = dht[i - 1] + drt[i - 1]
        if abs(dhrt[i - 1]) < SMALL:
            pv += dht[i - 1] * b0 * epsilon(-dhrt[i - 1])
        else:
            pv += (b0 - b1) * dht[i - 1] / dhrt[i - 1]
        ht0 = ht1
        rt0 = rt1
        b0 = b1

    df = discount_factors.discount_factor(reference_date)
    factor = (1.0 - recovery_rate) / df

    eps0 = _extended_epsilon(-dhrt[0], p[1], q[1], p[0], q[0])
    points = [
        discount_factors.zero_rate_point_sensitivity(schedule[0]).multiplied_by(
            -dht[0] * q[0] * eps0 * factor
        ),
        survival_probabilities.zero_rate_point_sensitivity(schedule[0]).multiplied_by(
            factor * (drt[0] * p[0] * eps0 + p[0])
        ),
    ]
    for i in range(1, n - 1):
        epsp = _extended_epsilon(-dhrt[i], p[i + 1], q[i + 1], p[i], q[i])
        epsm = _extended_epsilon(dhrt[i - 1], p[i - 1], q[i - 1], p[i], q[i])
        points.append(
            discount_factors.zero_rate_point_sensitivity(schedule[i]).multiplied_by(
                factor * (-dht[i] * q[i] * epsp - dht[i - 1] * q[i] * epsm)
            )
        )
        points.append(
            survival_probabilities.zero_rate_point_sensitivity(schedule[i]).multiplied_by(
                factor * (drt[i - 1] * p[i] * epsm + drt[i] * p[i] * epsp)
            )
        )
    eps_last = _extended_epsilon(dhrt[n - 2], p[n - 2], q[n - 2], p[n - 1], q[n - 1])
    points.append(
        discount_factors.zero_rate_point_sensitivity(schedule[n - 1]).multiplied_by(
            -dht[n - 2] * q[n - 1] * eps_last * factor
        )
    )
    points.append(
        survival_probabilities.zero_rate_point_sensitivity(schedule[n - 1]).multiplied_by(
            factor * (drt[n - 2] * p[n - 1] * eps_last - p[n - 1])
        )
    )

    df_sensitivity = discount_factors.zero_rate_point_sensitivity(reference_date).multiplied_by(
        -pv * factor / df
    )
    return PointSensitivities.of(df_sensitivity).combined_with(PointSensitivities(points))
