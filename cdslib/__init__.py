"""
cdslib - ISDA standard model pricing of single-name credit default swaps.
"""

from cdslib.conventions import (
    ACT_360,
    ACT_365F,
    BuySell,
    Frequency,
    PaymentOnDefault,
    PriceType,
    ProtectionStartOfDay,
    ReferenceData,
    StubConvention,
)
from cdslib.curves import (
    ConstantRecoveryRates,
    CreditRatesProvider,
    IsdaCreditDiscountFactors,
)
from cdslib.product import Cds, ResolvedCds, ResolvedCdsTrade
from cdslib.valuation import (
    AccrualOnDefaultFormula,
    CurrencyAmount,
    ExpiredTradeError,
    IncompatibleCurveError,
    IsdaCdsProductPricer,
    IsdaCdsTradePricer,
    JumpToDefault,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ACT_360",
    "ACT_365F",
    "BuySell",
    "Frequency",
    "PaymentOnDefault",
    "PriceType",
    "ProtectionStartOfDay",
    "ReferenceData",
    "StubConvention",
    "ConstantRecoveryRates",
    "CreditRatesProvider",
    "IsdaCreditDiscountFactors",
    "Cds",
    "ResolvedCds",
    "ResolvedCdsTrade",
    "AccrualOnDefaultFormula",
    "CurrencyAmount",
    "ExpiredTradeError",
    "IncompatibleCurveError",
    "IsdaCdsProductPricer",
    "IsdaCdsTradePricer",
    "JumpToDefault",
]
