"""
Risky annuity (premium leg per unit coupon) of a CDS.
"""

import logging
from datetime import date

from cdslib.conventions.types import PriceType
from cdslib.curves.base import CreditDiscountFactors
from cdslib.curves.isda import LegalEntitySurvivalProbabilities
from cdslib.product.resolved import ResolvedCds
from cdslib.sensitivity.point import PointSensitivities

from .accrual import AccrualOnDefaultKernel
from .integration import integration_points
from .truncation import PeriodStatus, accrual_on_default_start, period_status

logger = logging.getLogger(__name__)


def _accrual_schedule(
    product: ResolvedCds,
    discount_factors: CreditDiscountFactors,
    survival_probabilities: LegalEntitySurvivalProbabilities,
    effective_start_date: date,
):
    start = accrual_on_default_start(product, effective_start_date)
    return integration_points(
        discount_factors.relative_year_fraction(start),
        discount_factors.relative_year_fraction(product.protection_end_date),
        discount_factors.parameter_keys,
        survival_probabilities.parameter_keys,
    )


def risky_annuity(
    product: ResolvedCds,
    discount_factors: CreditDiscountFactors,
    survival_probabilities: LegalEntitySurvivalProbabilities,
    reference_date: date,
    stepin_date: date,
    effective_start_date: date,
    price_type: PriceType,
    kernel: AccrualOnDefaultKernel,
) -> float:
    """Risky annuity per unit notional, discounted to the reference date.

    Args:
        product: Resolved CDS
        discount_factors: Discount curve in the product currency
        survival_probabilities: Credit curve of the reference entity
        reference_date: Date the value is rolled to, typically cash settlement
        stepin_date: Step-in date; coupons ending on or before it are excluded
        effective_start_date: Start of protection derived from the step-in date
        price_type: CLEAN subtracts the premium accrued at the step-in date
        kernel: Accrual-on-default kernel

    Returns:
        Risky annuity as a year fraction
    """
    pv = 0.0
    for period in product.payment_periods:
        if period_status(period, stepin_date) is PeriodStatus.INCLUDED:
            q = survival_probabilities.survival_probability(period.effective_end_date)
            p = discount_factors.discount_factor(period.payment_date)
            pv += period.year_fraction * p * q

    if product.payment_on_default.is_accrued_interest():
        schedule = _accrual_schedule(
            product, discount_factors, survival_probabilities, effective_start_date
        )
        for period in product.payment_periods:
            pv += kernel.accrued_on_default(
                period, effective_start_date, schedule, discount_factors, survival_probabilities
            )

    df = discount_factors.discount_factor(reference_date)
    pv /= df

    if price_type.is_clean():
        # A step-in past the accrual end accrues the whole last period
        pv -= product.accrued_year_fraction(min(stepin_date, product.accrual_end_date))

    logger.debug("Risky annuity (%s) as of %s: %s", price_type.name, reference_date, pv)
    return pv


def risky_annuity_sensitivity(
    product: ResolvedCds,
    discount_factors: CreditDiscountFactors,
    survival_probabilities: LegalEntitySurvivalProbabilities,
    reference_date: date,
    stepin_date: date,
    effective_start_date: date,
    kernel: AccrualOnDefaultKernel,
) -> PointSensitivities:
    """Zero-rate point sensitivities of the dirty risky annuity.

    Accrued premium depends on no curve, so the clean annuity shares them.
    """
    pv = 0.0
    sensitivities = PointSensitivities.empty()
    for period in product.payment_periods:
        if period_status(period, stepin_date) is PeriodStatus.INCLUDED:
            q = survival_probabilities.survival_probability(period.effective_end_date)
            q_sensitivity = survival_probabilities.zero_rate_point_sensitivity(
                period.effective_end_date
            )
            p = discount_factors.discount_factor(period.payment_date)
            p_sensitivity = discount_factors.zero_rate_point_sensitivity(period.payment_date)
            pv += period.year_fraction * p * q
            sensitivities = sensitivities.combined_with(
                p_sensitivity.multiplied_by(period.year_fraction * q)
            ).combined_with(q_sensitivity.multiplied_by(period.year_fraction * p))

    if product.payment_on_default.is_accrued_interest():
        schedule = _accrual_schedule(
            product, discount_factors, survival_probabilities, effective_start_date
        )
        for period in product.payment_periods:
            value, period_sensitivities = kernel.accrued_on_default_sensitivity(
                period, effective_start_date, schedule, discount_factors, survival_probabilities
            )
            pv += value
            sensitivities = sensitivities.combined_with(period_sensitivities)

    df = discount_factors.discount_factor(reference_date)
    df_sensitivity = discount_factors.zero_rate_point_sensitivity(reference_date).multiplied_by(
        -pv / (df * df)
    )
    return PointSensitivities.of(df_sensitivity).combined_with(
        sensitivities.multiplied_by(1.0 / df)
    )
