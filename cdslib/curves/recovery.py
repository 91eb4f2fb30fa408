"""
Recovery rates of reference entities.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional


class RecoveryRates(ABC):
    """Recovery rate of a legal entity, possibly varying with date."""

    def __init__(self, legal_entity_id: str, valuation_date: date):
        self.legal_entity_id = legal_entity_id
        self.valuation_date = valuation_date

    @abstractmethod
    def recovery_rate(self, dt: Optional[date] = None) -> float:
        pass


class ConstantRecoveryRates(RecoveryRates):
    """Recovery rate that does not depend on the default date."""

    def __init__(self, legal_entity_id: str, valuation_date: date, recovery_rate: float):
        super().__init__(legal_entity_id, valuation_date)
        if not 0.0 <= recovery_rate <= 1.0:
            raise ValueError(
                f"Recovery rate must be between 0 and 1, got {recovery_rate}"
            )
        self._recovery_rate = float(recovery_rate)

    @classmethod
    def of(
        cls, legal_entity_id: str, valuation_date: date, recovery_rate: float
    ) -> "ConstantRecoveryRates":
        return cls(legal_entity_id, valuation_date, recovery_rate)

    def recovery_rate(self, dt: Optional[date] = None) -> float:
        return self._recovery_rate

    def with_valuation_date(self, valuation_date: date) -> "ConstantRecoveryRates":
        return ConstantRecoveryRates(self.legal_entity_id, valuation_date, self._recovery_rate)

    def __repr__(self) -> str:
        return (
            f"ConstantRecoveryRates({self.legal_entity_id!r}, "
            f"{self.valuation_date}, {self._recovery_rate})"
        )
