"""
CDS product definitions and their resolved, period-level form.
"""

from .cds import Cds
from .resolved import CreditCouponPaymentPeriod, ResolvedCds, ResolvedCdsTrade

__all__ = [
    "Cds",
    "CreditCouponPaymentPeriod",
    "ResolvedCds",
    "ResolvedCdsTrade",
]
