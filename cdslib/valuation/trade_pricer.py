"""
Trade-level CDS pricer.

Values are discounted to the trade settlement date when the trade carries
one, otherwise to the valuation date shifted by the product's settlement
offset.
"""

from datetime import date
from typing import Optional

from cdslib.conventions.reference_data import ReferenceData
from cdslib.conventions.types import PriceType
from cdslib.curves.provider import CreditRatesProvider
from cdslib.product.resolved import ResolvedCdsTrade
from cdslib.sensitivity.point import PointSensitivities

from .accrual import AccrualOnDefaultFormula
from .pricer import IsdaCdsProductPricer
from .types import CurrencyAmount, JumpToDefault


class IsdaCdsTradePricer:
    """Prices resolved CDS trades with the ISDA standard model."""

    def __init__(
        self,
        formula: AccrualOnDefaultFormula = AccrualOnDefaultFormula.ORIGINAL_ISDA,
        product_pricer: Optional[IsdaCdsProductPricer] = None,
    ):
        self.product_pricer = product_pricer or IsdaCdsProductPricer(formula)

    @property
    def formula(self) -> AccrualOnDefaultFormula:
        return self.product_pricer.formula

    def reference_date(
        self, trade: ResolvedCdsTrade, provider: CreditRatesProvider, ref_data: ReferenceData
    ) -> date:
        if trade.settlement_date is not None:
            return trade.settlement_date
        return trade.product.settlement_date_offset.adjust(provider.valuation_date, ref_data)

    def price(
        self,
        trade: ResolvedCdsTrade,
        provider: CreditRatesProvider,
        price_type: PriceType,
        ref_data: ReferenceData,
    ) -> float:
        return self.product_pricer.price(
            trade.product,
            provider,
            self.reference_date(trade, provider, ref_data),
            price_type,
            ref_data,
        )

    def price_from_par_spread(
        self,
        trade: ResolvedCdsTrade,
        provider: CreditRatesProvider,
        par_spread: float,
        ref_data: ReferenceData,
    ) -> float:
        """Clean price of the trade's coupon quoted as a par spread.

        The quote is converted with ``protection leg - par_spread * clean annuity``;
        the product coupon itself is left unchanged.
        """
        return self.product_pricer.price(
            trade.product,
            provider,
            self.reference_date(trade, provider, ref_data),
            PriceType.CLEAN,
            ref_data,
            fixed_rate=par_spread,
        )

    def price_sensitivity(
        self, trade: ResolvedCdsTrade, provider: CreditRatesProvider, ref_data: ReferenceData
    ) -> PointSensitivities:
        return self.product_pricer.price_sensitivity(
            trade.product, provider, self.reference_date(trade, provider, ref_data), ref_data
        )

    def present_value(
        self,
        trade: ResolvedCdsTrade,
        provider: CreditRatesProvider,
        price_type: PriceType,
        ref_data: ReferenceData,
    ) -> CurrencyAmount:
        return self.product_pricer.present_value(
            trade.product,
            provider,
            self.reference_date(trade, provider, ref_data),
            price_type,
            ref_data,
        )

    def present_value_sensitivity(
        self, trade: ResolvedCdsTrade, provider: CreditRatesProvider, ref_data: ReferenceData
    ) -> PointSensitivities:
        return self.product_pricer.present_value_sensitivity(
            trade.product, provider, self.reference_date(trade, provider, ref_data), ref_data
        )

    def par_spread(
        self,
        trade: ResolvedCdsTrade,
        provider: CreditRatesProvider,
        ref_data: ReferenceData,
        price_type: PriceType = PriceType.DIRTY,
    ) -> float:
        return self.product_pricer.par_spread(
            trade.product,
            provider,
            self.reference_date(trade, provider, ref_data),
            ref_data,
            price_type,
        )

    def par_spread_sensitivity(
        self,
        trade: ResolvedCdsTrade,
        provider: CreditRatesProvider,
        ref_data: ReferenceData,
        price_type: PriceType = PriceType.DIRTY,
    ) -> PointSensitivities:
        return self.product_pricer.par_spread_sensitivity(
            trade.product,
            provider,
            self.reference_date(trade, provider, ref_data),
            ref_data,
            price_type,
        )

    def rpv01(
        self,
        trade: ResolvedCdsTrade,
        provider: CreditRatesProvider,
        price_type: PriceType,
        ref_data: ReferenceData,
    ) -> CurrencyAmount:
        return self.product_pricer.rpv01(
            trade.product,
            provider,
            self.reference_date(trade, provider, ref_data),
            price_type,
            ref_data,
        )

    def recovery01(
        self, trade: ResolvedCdsTrade, provider: CreditRatesProvider, ref_data: ReferenceData
    ) -> CurrencyAmount:
        return self.product_pricer.recovery01(
            trade.product, provider, self.reference_date(trade, provider, ref_data), ref_data
        )

    def jump_to_default(
        self, trade: ResolvedCdsTrade, provider: CreditRatesProvider, ref_data: ReferenceData
    ) -> JumpToDefault:
        return self.product_pricer.jump_to_default(
            trade.product, provider, self.reference_date(trade, provider, ref_data), ref_data
        )

    def expected_loss(
        self, trade: ResolvedCdsTrade, provider: CreditRatesProvider
    ) -> CurrencyAmount:
        return self.product_pricer.expected_loss(trade.product, provider)
