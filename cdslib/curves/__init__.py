"""
Curves package - ISDA zero curves, survival probabilities and recovery rates.

Main APIs:
    - IsdaCreditDiscountFactors: Product-linear zero curve for discounting and credit
    - LegalEntitySurvivalProbabilities: Credit curve of one reference entity
    - CreditRatesProvider: Market data bundle handed to the pricers
"""

from .base import CreditDiscountFactors
from .isda import IsdaCreditDiscountFactors, LegalEntitySurvivalProbabilities
from .provider import CreditRatesProvider
from .recovery import ConstantRecoveryRates, RecoveryRates

__all__ = [
    "CreditDiscountFactors",
    "IsdaCreditDiscountFactors",
    "LegalEntitySurvivalProbabilities",
    "CreditRatesProvider",
    "ConstantRecoveryRates",
    "RecoveryRates",
]
