"""
Basic types and enums used across the scheduling and pricing code.
"""

from datetime import date, timedelta
from enum import Enum


class Frequency(Enum):
    """Payment frequencies, valued in months."""

    MONTHLY = 1
    BIMONTHLY = 2
    QUARTERLY = 3
    FOUR_MONTHLY = 4
    SEMIANNUAL = 6
    ANNUAL = 12

    # Tenor-style aliases
    P1M = 1
    P2M = 2
    P3M = 3
    P4M = 4
    P6M = 6
    P12M = 12

    def months(self) -> int:
        return self.value


class BusinessDayConvention(Enum):
    """Business day adjustment rules."""

    NO_ADJUSTMENT = "NO_ADJUSTMENT"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"


class StubConvention(Enum):
    """Stub period types for schedule generation."""

    NONE = "NONE"
    SHORT_INITIAL = "SHORT_INITIAL"
    LONG_INITIAL = "LONG_INITIAL"
    SMART_INITIAL = "SMART_INITIAL"
    SHORT_FINAL = "SHORT_FINAL"
    LONG_FINAL = "LONG_FINAL"
    SMART_FINAL = "SMART_FINAL"

    def is_calculate_backwards(self) -> bool:
        """Whether dates are rolled back from the end date (initial stubs)."""
        return self in (
            StubConvention.SHORT_INITIAL,
            StubConvention.LONG_INITIAL,
            StubConvention.SMART_INITIAL,
        )

    def is_stub_long(self, date1: date, date2: date) -> bool:
        """Whether a stub between the two dates is merged into its neighbour.

        The smart conventions only produce a long stub when the short stub
        would be seven days or less.
        """
        if self in (StubConvention.LONG_INITIAL, StubConvention.LONG_FINAL):
            return True
        if self in (StubConvention.SMART_INITIAL, StubConvention.SMART_FINAL):
            return date1 + timedelta(days=7) > date2
        return False


class BuySell(Enum):
    """Whether protection is bought or sold."""

    BUY = 1
    SELL = -1

    def normalize(self, amount: float) -> float:
        """Apply the sign of this side to the magnitude of ``amount``."""
        return self.value * abs(amount)

    def is_buy(self) -> bool:
        return self is BuySell.BUY


class PriceType(Enum):
    """Whether accrued premium is included in a price."""

    CLEAN = "CLEAN"
    DIRTY = "DIRTY"

    def is_clean(self) -> bool:
        return self is PriceType.CLEAN


class PaymentOnDefault(Enum):
    """Premium paid to the protection seller when default occurs."""

    ACCRUED_PREMIUM = "ACCRUED_PREMIUM"
    NONE = "NONE"

    def is_accrued_interest(self) -> bool:
        return self is PaymentOnDefault.ACCRUED_PREMIUM


class ProtectionStartOfDay(Enum):
    """Whether protection starts at the beginning of the effective date."""

    BEGINNING = "BEGINNING"
    NONE = "NONE"

    def is_beginning(self) -> bool:
        return self is ProtectionStartOfDay.BEGINNING
