"""
Market data provider for credit products.
"""

import copy
import logging
from datetime import date
from typing import Dict, Mapping, Optional, Tuple

from cdslib.sensitivity.parameter import (
    CurveParameterSensitivities,
    CurveParameterSensitivity,
)
from cdslib.sensitivity.point import CreditCurveZeroRateSensitivity, PointSensitivities

from .base import CreditDiscountFactors
from .isda import LegalEntitySurvivalProbabilities
from .recovery import RecoveryRates

logger = logging.getLogger(__name__)


class CreditRatesProvider:
    """Discount curves, credit curves and recovery rates at one valuation date.

    Credit curves are keyed by (legal entity, currency), discount curves by
    currency and recovery rates by legal entity.
    """

    def __init__(
        self,
        valuation_date: date,
        credit_curves: Optional[Mapping[Tuple[str, str], CreditDiscountFactors]] = None,
        discount_curves: Optional[Mapping[str, CreditDiscountFactors]] = None,
        recovery_rates: Optional[Mapping[str, RecoveryRates]] = None,
    ):
        self.valuation_date = valuation_date
        self._credit_curves: Dict[Tuple[str, str], CreditDiscountFactors] = dict(
            credit_curves or {}
        )
        self._discount_curves: Dict[str, CreditDiscountFactors] = dict(discount_curves or {})
        self._recovery_rates: Dict[str, RecoveryRates] = dict(recovery_rates or {})
        self._validate()
        self._survival_probabilities = {
            key: LegalEntitySurvivalProbabilities(key[0], curve)
            for key, curve in self._credit_curves.items()
        }

    def _validate(self):
        curves = list(self._credit_curves.values()) + list(self._discount_curves.values())
        for curve in curves:
            if curve.valuation_date != self.valuation_date:
                raise ValueError(
                    f"Curve {curve} is anchored at {curve.valuation_date}, "
                    f"provider valuation date is {self.valuation_date}"
                )
        for (entity, currency), curve in self._credit_curves.items():
            if curve.currency != currency:
                raise ValueError(
                    f"Credit curve for {entity} is in {curve.currency}, keyed under {currency}"
                )

    @property
    def credit_curves(self) -> Dict[Tuple[str, str], CreditDiscountFactors]:
        return dict(self._credit_curves)

    @property
    def discount_curves(self) -> Dict[str, CreditDiscountFactors]:
        return dict(self._discount_curves)

    @property
    def recovery_rate_curves(self) -> Dict[str, RecoveryRates]:
        return dict(self._recovery_rates)

    def discount_factors(self, currency: str) -> CreditDiscountFactors:
        if currency not in self._discount_curves:
            raise ValueError(
                f"Unable to find discount curve for {currency}. "
                f"Available: {list(self._discount_curves)}"
            )
        return self._discount_curves[currency]

    def survival_probabilities(
        self, legal_entity_id: str, currency: str
    ) -> LegalEntitySurvivalProbabilities:
        key = (legal_entity_id, currency)
        if key not in self._credit_curves:
            raise ValueError(
                f"Unable to find credit curve for {legal_entity_id} in {currency}. "
                f"Available: {list(self._credit_curves)}"
            )
        return self._survival_probabilities[key]

    def recovery_rates(self, legal_entity_id: str) -> RecoveryRates:
        if legal_entity_id not in self._recovery_rates:
            raise ValueError(
                f"Unable to find recovery rates for {legal_entity_id}. "
                f"Available: {list(self._recovery_rates)}"
            )
        return self._recovery_rates[legal_entity_id]

    def discount_curve_name(self, currency: str) -> str:
        return self.discount_factors(currency).name or f"{currency}-DSC"

    def credit_curve_name(self, legal_entity_id: str, currency: str) -> str:
        curve = self.survival_probabilities(legal_entity_id, currency).survival_probabilities
        return curve.name or f"{legal_entity_id}-{currency}-CDS"

    def with_discount_curve(
        self, currency: str, curve: CreditDiscountFactors
    ) -> "CreditRatesProvider":
        provider = copy.copy(self)
        provider._discount_curves = dict(self._discount_curves)
        provider._discount_curves[currency] = curve
        provider._validate()
        return provider

    def with_credit_curve(
        self, legal_entity_id: str, currency: str, curve: CreditDiscountFactors
    ) -> "CreditRatesProvider":
        key = (legal_entity_id, currency)
        provider = copy.copy(self)
        provider._credit_curves = dict(self._credit_curves)
        provider._credit_curves[key] = curve
        provider._validate()
        # Only the replaced curve is wrapped again
        provider._survival_probabilities = dict(self._survival_probabilities)
        provider._survival_probabilities[key] = LegalEntitySurvivalProbabilities(
            legal_entity_id, curve
        )
        return provider

    def parameter_sensitivity(
        self, point_sensitivities: PointSensitivities
    ) -> CurveParameterSensitivities:
        """Map point sensitivities onto the node zero rates of the curves."""
        accumulated: Dict[str, CurveParameterSensitivity] = {}
        for point in point_sensitivities:
            if isinstance(point, CreditCurveZeroRateSensitivity):
                curve = self.survival_probabilities(
                    point.legal_entity_id, point.currency
                ).survival_probabilities
                name = self.credit_curve_name(point.legal_entity_id, point.currency)
            else:
                curve = self.discount_factors(point.currency)
                name = self.discount_curve_name(point.currency)

            node_sensitivity = (
                curve.zero_rate_parameter_sensitivity(point.year_fraction) * point.sensitivity
            )
            contribution = CurveParameterSensitivity(
                name, curve.currency, curve.parameter_keys, node_sensitivity
            )
            if name in accumulated:
                accumulated[name] = accumulated[name].plus(contribution)
            else:
                accumulated[name] = contribution

        logger.debug(
            "Mapped %d point sensitivities onto %d curves",
            len(point_sensitivities),
            len(accumulated),
        )
        return CurveParameterSensitivities(accumulated.values())

    def __repr__(self) -> str:
        return (
            f"CreditRatesProvider(valuation_date={self.valuation_date}, "
            f"credit_curves={list(self._credit_curves)}, "
            f"discount_curves={list(self._discount_curves)})"
        )
