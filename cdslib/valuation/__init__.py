"""
CDS valuation with the ISDA standard model.

Key modules:
- pricer: Product-level values, risk measures and sensitivities
- trade_pricer: Trade-level wrapper discounting to the settlement date
- accrual: Accrual-on-default formulas
- protection, annuity: Leg integrals
"""

from .accrual import (
    AccrualOnDefaultFormula,
    AccrualOnDefaultKernel,
    AccrualTimeKernel,
    MarkitFixKernel,
)
from .errors import ExpiredTradeError, IncompatibleCurveError
from .pricer import DEFAULT, IsdaCdsProductPricer
from .trade_pricer import IsdaCdsTradePricer
from .types import CurrencyAmount, JumpToDefault

__all__ = [
    "AccrualOnDefaultFormula",
    "AccrualOnDefaultKernel",
    "AccrualTimeKernel",
    "MarkitFixKernel",
    "ExpiredTradeError",
    "IncompatibleCurveError",
    "DEFAULT",
    "IsdaCdsProductPricer",
    "IsdaCdsTradePricer",
    "CurrencyAmount",
    "JumpToDefault",
]
