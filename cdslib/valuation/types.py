"""
Result types returned by the CDS pricers.
"""

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class CurrencyAmount:
    """An amount of money in a currency."""

    currency: str
    amount: float

    @classmethod
    def zero(cls, currency: str) -> "CurrencyAmount":
        return cls(currency, 0.0)

    @classmethod
    def of(cls, currency: str, amount: float) -> "CurrencyAmount":
        return cls(currency, float(amount))

    def multiplied_by(self, factor: float) -> "CurrencyAmount":
        return CurrencyAmount(self.currency, self.amount * factor)

    def plus(self, other: "CurrencyAmount") -> "CurrencyAmount":
        if other.currency != self.currency:
            raise ValueError(
                f"Cannot add {other.currency} amount to {self.currency} amount"
            )
        return CurrencyAmount(self.currency, self.amount + other.amount)

    def __str__(self) -> str:
        return f"{self.currency} {self.amount}"


@dataclass(frozen=True)
class JumpToDefault:
    """Value change on immediate default, per legal entity."""

    currency: str
    amounts: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def of(cls, currency: str, amounts: Dict[str, float]) -> "JumpToDefault":
        return cls(currency, dict(amounts))

    def __hash__(self) -> int:
        return hash((self.currency, tuple(sorted(self.amounts.items()))))
