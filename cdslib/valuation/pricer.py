"""
ISDA standard model pricer for single-name CDS products.

All values are computed per unit notional by the leg functions and scaled by
the signed notional here. The reference date passed to each method is the
date values are discounted to, typically the cash settlement date; the
step-in date and expiry are always judged from the provider valuation date.
"""

import logging
from datetime import date
from typing import NamedTuple, Optional

from cdslib.conventions.reference_data import ReferenceData
from cdslib.conventions.types import PriceType
from cdslib.curves.base import CreditDiscountFactors
from cdslib.curves.isda import LegalEntitySurvivalProbabilities
from cdslib.curves.provider import CreditRatesProvider
from cdslib.curves.recovery import ConstantRecoveryRates
from cdslib.product.resolved import ResolvedCds
from cdslib.sensitivity.point import PointSensitivities

from .accrual import AccrualOnDefaultFormula
from .annuity import risky_annuity, risky_annuity_sensitivity
from .errors import ExpiredTradeError, IncompatibleCurveError
from .protection import protection_full, protection_leg, protection_leg_sensitivity
from .truncation import is_expired
from .types import CurrencyAmount, JumpToDefault

logger = logging.getLogger(__name__)


class _MarketState(NamedTuple):
    stepin_date: date
    effective_start_date: date
    discount_factors: CreditDiscountFactors
    survival_probabilities: LegalEntitySurvivalProbabilities


class IsdaCdsProductPricer:
    """Prices resolved CDS products with the ISDA standard model."""

    def __init__(
        self, formula: AccrualOnDefaultFormula = AccrualOnDefaultFormula.ORIGINAL_ISDA
    ):
        """
        Initialize the pricer.

        Args:
            formula: Accrual-on-default formula used by both values and sensitivities
        """
        if formula is None:
            raise ValueError("Accrual-on-default formula must be specified")
        self.formula = formula
        self._kernel = formula.kernel()

    @property
    def omega(self) -> float:
        return self.formula.omega

    # ------------------------------------------------------------------
    # Market data

    def _market_state(
        self, cds: ResolvedCds, provider: CreditRatesProvider, ref_data: ReferenceData
    ) -> _MarketState:
        stepin_date = cds.step_in_date_offset.adjust(provider.valuation_date, ref_data)
        effective_start_date = cds.calculate_effective_start_date(stepin_date)

        discount_factors = provider.discount_factors(cds.currency)
        if not discount_factors.is_isda_compliant:
            raise IncompatibleCurveError(
                f"Discount curve for {cds.currency} must be an ISDA compliant curve"
            )
        survival_probabilities = provider.survival_probabilities(
            cds.legal_entity_id, cds.currency
        )
        if not survival_probabilities.survival_probabilities.is_isda_compliant:
            raise IncompatibleCurveError(
                f"Credit curve for {cds.legal_entity_id} must be an ISDA compliant curve"
            )
        if discount_factors.day_count != survival_probabilities.day_count:
            raise IncompatibleCurveError(
                "Day count conventions of discount curve and credit curve must be the same, "
                f"got {discount_factors.day_count} and {survival_probabilities.day_count}"
            )
        return _MarketState(
            stepin_date, effective_start_date, discount_factors, survival_probabilities
        )

    def _recovery_rate(self, cds: ResolvedCds, provider: CreditRatesProvider) -> float:
        recovery_rates = provider.recovery_rates(cds.legal_entity_id)
        if not isinstance(recovery_rates, ConstantRecoveryRates):
            raise IncompatibleCurveError(
                f"Recovery rates for {cds.legal_entity_id} must be constant, "
                f"got {type(recovery_rates).__name__}"
            )
        return recovery_rates.recovery_rate(cds.protection_end_date)

    def _check_not_expired(self, cds: ResolvedCds, provider: CreditRatesProvider):
        if is_expired(cds, provider.valuation_date):
            raise ExpiredTradeError(
                f"Par spread undefined for expired trade: protection ended "
                f"{cds.protection_end_date}, valuation date {provider.valuation_date}"
            )

    def _check_annuity(self, cds: ResolvedCds, annuity: float):
        if annuity == 0.0:
            raise ExpiredTradeError(
                f"Par spread undefined: no protection remains after the step-in date, "
                f"protection ends {cds.protection_end_date}"
            )

    def _protection_leg(self, cds, state: _MarketState, reference_date, recovery_rate) -> float:
        return protection_leg(
            cds,
            state.discount_factors,
            state.survival_probabilities,
            reference_date,
            state.effective_start_date,
            recovery_rate,
        )

    def _risky_annuity(self, cds, state: _MarketState, reference_date, price_type) -> float:
        return risky_annuity(
            cds,
            state.discount_factors,
            state.survival_probabilities,
            reference_date,
            state.stepin_date,
            state.effective_start_date,
            price_type,
            self._kernel,
        )

    def _protection_leg_sensitivity(
        self, cds, state: _MarketState, reference_date, recovery_rate
    ) -> PointSensitivities:
        return protection_leg_sensitivity(
            cds,
            state.discount_factors,
            state.survival_probabilities,
            reference_date,
            state.effective_start_date,
            recovery_rate,
        )

    def _risky_annuity_sensitivity(
        self, cds, state: _MarketState, reference_date
    ) -> PointSensitivities:
        return risky_annuity_sensitivity(
            cds,
            state.discount_factors,
            state.survival_probabilities,
            reference_date,
            state.stepin_date,
            state.effective_start_date,
            self._kernel,
        )

    # ------------------------------------------------------------------
    # Price and present value

    def price(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        price_type: PriceType,
        ref_data: ReferenceData,
        fixed_rate: Optional[float] = None,
    ) -> float:
        """Price per unit notional, ``protection leg - coupon * risky annuity``.

        Args:
            cds: Resolved CDS
            provider: Market data
            reference_date: Date the price is discounted to
            price_type: CLEAN excludes the premium accrued at the step-in date
            ref_data: Calendars for the step-in offset
            fixed_rate: Coupon to price with instead of the product coupon

        Returns:
            Price as a fraction of notional, zero once protection has ended
        """
        if is_expired(cds, provider.valuation_date):
            return 0.0
        coupon = cds.fixed_rate if fixed_rate is None else fixed_rate
        state = self._market_state(cds, provider, ref_data)
        recovery_rate = self._recovery_rate(cds, provider)
        protection = self._protection_leg(cds, state, reference_date, recovery_rate)
        annuity = self._risky_annuity(cds, state, reference_date, price_type)
        price = protection - annuity * coupon
        logger.debug(
            "Price of %s CDS on %s: protection=%s annuity=%s coupon=%s price=%s",
            cds.buy_sell.name,
            cds.legal_entity_id,
            protection,
            annuity,
            coupon,
            price,
        )
        return price

    def price_sensitivity(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        ref_data: ReferenceData,
    ) -> PointSensitivities:
        if is_expired(cds, provider.valuation_date):
            return PointSensitivities.empty()
        state = self._market_state(cds, provider, ref_data)
        recovery_rate = self._recovery_rate(cds, provider)
        protection = self._protection_leg_sensitivity(cds, state, reference_date, recovery_rate)
        annuity = self._risky_annuity_sensitivity(cds, state, reference_date)
        return protection.combined_with(annuity.multiplied_by(-cds.fixed_rate))

    def present_value(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        price_type: PriceType,
        ref_data: ReferenceData,
    ) -> CurrencyAmount:
        price = self.price(cds, provider, reference_date, price_type, ref_data)
        return CurrencyAmount.of(cds.currency, cds.signed_notional * price)

    def present_value_sensitivity(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        ref_data: ReferenceData,
    ) -> PointSensitivities:
        if is_expired(cds, provider.valuation_date):
            return PointSensitivities.empty()
        state = self._market_state(cds, provider, ref_data)
        recovery_rate = self._recovery_rate(cds, provider)
        signed_notional = cds.signed_notional
        protection = self._protection_leg_sensitivity(
            cds, state, reference_date, recovery_rate
        ).multiplied_by(signed_notional)
        annuity = self._risky_annuity_sensitivity(cds, state, reference_date).multiplied_by(
            -cds.fixed_rate * signed_notional
        )
        return protection.combined_with(annuity)

    # ------------------------------------------------------------------
    # Par spread

    def par_spread(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        ref_data: ReferenceData,
        price_type: PriceType = PriceType.DIRTY,
    ) -> float:
        """Coupon making the price of the given type zero.

        Raises:
            ExpiredTradeError: If protection has already ended, or the risky
                annuity is zero because nothing is left after the step-in date
        """
        self._check_not_expired(cds, provider)
        state = self._market_state(cds, provider, ref_data)
        recovery_rate = self._recovery_rate(cds, provider)
        protection = self._protection_leg(cds, state, reference_date, recovery_rate)
        annuity = self._risky_annuity(cds, state, reference_date, price_type)
        self._check_annuity(cds, annuity)
        return protection / annuity

    def par_spread_sensitivity(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        ref_data: ReferenceData,
        price_type: PriceType = PriceType.DIRTY,
    ) -> PointSensitivities:
        self._check_not_expired(cds, provider)
        state = self._market_state(cds, provider, ref_data)
        recovery_rate = self._recovery_rate(cds, provider)
        protection = self._protection_leg(cds, state, reference_date, recovery_rate)
        annuity = self._risky_annuity(cds, state, reference_date, price_type)
        self._check_annuity(cds, annuity)
        annuity_inv = 1.0 / annuity

        protection_sensitivity = self._protection_leg_sensitivity(
            cds, state, reference_date, recovery_rate
        ).multiplied_by(annuity_inv)
        annuity_sensitivity = self._risky_annuity_sensitivity(
            cds, state, reference_date
        ).multiplied_by(-protection * annuity_inv * annuity_inv)
        return protection_sensitivity.combined_with(annuity_sensitivity)

    # ------------------------------------------------------------------
    # Legs

    def protection_leg(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        ref_data: ReferenceData,
    ) -> float:
        """Protection leg per unit notional, including the loss given default."""
        if is_expired(cds, provider.valuation_date):
            return 0.0
        state = self._market_state(cds, provider, ref_data)
        recovery_rate = self._recovery_rate(cds, provider)
        return self._protection_leg(cds, state, reference_date, recovery_rate)

    def protection_leg_sensitivity(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        ref_data: ReferenceData,
    ) -> PointSensitivities:
        if is_expired(cds, provider.valuation_date):
            return PointSensitivities.empty()
        state = self._market_state(cds, provider, ref_data)
        recovery_rate = self._recovery_rate(cds, provider)
        return self._protection_leg_sensitivity(cds, state, reference_date, recovery_rate)

    def risky_annuity(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        price_type: PriceType,
        ref_data: ReferenceData,
    ) -> float:
        """Risky annuity (RPV01 per unit notional)."""
        if is_expired(cds, provider.valuation_date):
            return 0.0
        state = self._market_state(cds, provider, ref_data)
        return self._risky_annuity(cds, state, reference_date, price_type)

    def risky_annuity_sensitivity(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        ref_data: ReferenceData,
    ) -> PointSensitivities:
        if is_expired(cds, provider.valuation_date):
            return PointSensitivities.empty()
        state = self._market_state(cds, provider, ref_data)
        return self._risky_annuity_sensitivity(cds, state, reference_date)

    # ------------------------------------------------------------------
    # Risk measures

    def rpv01(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        price_type: PriceType,
        ref_data: ReferenceData,
    ) -> CurrencyAmount:
        """Minus the present value sensitivity to the coupon."""
        annuity = self.risky_annuity(cds, provider, reference_date, price_type, ref_data)
        return CurrencyAmount.of(cds.currency, cds.signed_notional * annuity)

    def recovery01(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        ref_data: ReferenceData,
    ) -> CurrencyAmount:
        """Present value sensitivity to the (constant) recovery rate."""
        if is_expired(cds, provider.valuation_date):
            return CurrencyAmount.zero(cds.currency)
        state = self._market_state(cds, provider, ref_data)
        self._recovery_rate(cds, provider)
        full = protection_full(
            cds,
            state.discount_factors,
            state.survival_probabilities,
            reference_date,
            state.effective_start_date,
        )
        return CurrencyAmount.of(cds.currency, -cds.signed_notional * full)

    def jump_to_default(
        self,
        cds: ResolvedCds,
        provider: CreditRatesProvider,
        reference_date: date,
        ref_data: ReferenceData,
    ) -> JumpToDefault:
        """Value change if the reference entity defaulted immediately."""
        if is_expired(cds, provider.valuation_date):
            return JumpToDefault.of(cds.currency, {cds.legal_entity_id: 0.0})
        state = self._market_state(cds, provider, ref_data)
        recovery_rate = self._recovery_rate(cds, provider)
        full = protection_full(
            cds,
            state.discount_factors,
            state.survival_probabilities,
            reference_date,
            state.effective_start_date,
        )
        lgd = 1.0 - recovery_rate
        clean_annuity = self._risky_annuity(cds, state, reference_date, PriceType.CLEAN)
        jtd = lgd - (lgd * full - cds.fixed_rate * clean_annuity)
        return JumpToDefault.of(cds.currency, {cds.legal_entity_id: cds.signed_notional * jtd})

    def expected_loss(self, cds: ResolvedCds, provider: CreditRatesProvider) -> CurrencyAmount:
        """Undiscounted expected default payment of the protection seller, always positive."""
        if is_expired(cds, provider.valuation_date):
            return CurrencyAmount.zero(cds.currency)
        recovery_rate = self._recovery_rate(cds, provider)
        survival = provider.survival_probabilities(cds.legal_entity_id, cds.currency)
        q = survival.survival_probability(cds.protection_end_date)
        loss = (1.0 - recovery_rate) * (1.0 - q)
        return CurrencyAmount.of(cds.currency, abs(cds.notional) * loss)


DEFAULT = IsdaCdsProductPricer(AccrualOnDefaultFormula.ORIGINAL_ISDA)
