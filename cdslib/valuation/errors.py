"""
Errors raised by the CDS pricers.
"""


class ExpiredTradeError(ValueError):
    """Raised when a measure is undefined because protection has ended."""


class IncompatibleCurveError(ValueError):
    """Raised when market data cannot be used with the ISDA standard model."""
