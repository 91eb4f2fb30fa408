"""Finite-difference curve sensitivities, used to verify analytic sensitivities."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List

import numpy as np

from .parameter import CurveParameterSensitivities, CurveParameterSensitivity

if TYPE_CHECKING:
    from cdslib.curves.provider import CreditRatesProvider

logger = logging.getLogger(__name__)


class FiniteDifferenceCalculator:
    """Central-difference bump of every node zero rate of every curve.

    Each node of each discount and credit curve in the provider is shifted up
    and down by ``shift``; the resulting sensitivities are keyed with the
    same curve names the analytic ``parameter_sensitivity`` uses.
    """

    def __init__(self, shift: float = 1e-6):
        if shift <= 0:
            raise ValueError(f"Shift must be positive, got {shift}")
        self.shift = shift

    def sensitivity(
        self,
        provider: CreditRatesProvider,
        value_fn: Callable[[CreditRatesProvider], float],
    ) -> CurveParameterSensitivities:
        results: List[CurveParameterSensitivity] = []

        for currency, curve in provider.discount_curves.items():
            values = self._bump_nodes(
                curve, lambda c, ccy=currency: value_fn(provider.with_discount_curve(ccy, c))
            )
            results.append(
                CurveParameterSensitivity(
                    provider.discount_curve_name(currency),
                    curve.currency,
                    curve.parameter_keys,
                    values,
                )
            )

        for (entity, currency), curve in provider.credit_curves.items():
            values = self._bump_nodes(
                curve,
                lambda c, e=entity, ccy=currency: value_fn(
                    provider.with_credit_curve(e, ccy, c)
                ),
            )
            results.append(
                CurveParameterSensitivity(
                    provider.credit_curve_name(entity, currency),
                    curve.currency,
                    curve.parameter_keys,
                    values,
                )
            )

        return CurveParameterSensitivities(results)

    def _bump_nodes(self, curve, revalue: Callable) -> np.ndarray:
        rates = curve.zero_rates
        values = np.zeros(len(rates))
        for i, rate in enumerate(rates):
            up = revalue(curve.with_zero_rate(i, rate + self.shift))
            down = revalue(curve.with_zero_rate(i, rate - self.shift))
            values[i] = (up - down) / (2.0 * self.shift)
            logger.debug(
                "FD node=%s rate=%s up=%s down=%s delta=%s",
                curve.parameter_keys[i],
                rate,
                up,
                down,
                values[i],
            )
        return values
