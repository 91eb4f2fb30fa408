"""
Point sensitivities to zero rates at arbitrary curve times.

A point sensitivity records the derivative of a value with respect to the zero
rate of one curve at one year fraction. They are produced by the analytic
pricer and mapped onto curve nodes by ``CreditRatesProvider.parameter_sensitivity``.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Tuple, Union


@dataclass(frozen=True)
class ZeroRateSensitivity:
    """Sensitivity to the zero rate of a discount curve."""

    currency: str
    year_fraction: float
    sensitivity: float

    def multiplied_by(self, factor: float) -> "ZeroRateSensitivity":
        return replace(self, sensitivity=self.sensitivity * factor)

    def with_sensitivity(self, sensitivity: float) -> "ZeroRateSensitivity":
        return replace(self, sensitivity=sensitivity)

    def _key(self) -> tuple:
        return (0, self.currency, "", self.year_fraction)


@dataclass(frozen=True)
class CreditCurveZeroRateSensitivity:
    """Sensitivity to the zero rate of a legal entity's survival curve."""

    legal_entity_id: str
    currency: str
    year_fraction: float
    sensitivity: float

    def multiplied_by(self, factor: float) -> "CreditCurveZeroRateSensitivity":
        return replace(self, sensitivity=self.sensitivity * factor)

    def with_sensitivity(self, sensitivity: float) -> "CreditCurveZeroRateSensitivity":
        return replace(self, sensitivity=sensitivity)

    def _key(self) -> tuple:
        return (1, self.currency, self.legal_entity_id, self.year_fraction)


PointSensitivity = Union[ZeroRateSensitivity, CreditCurveZeroRateSensitivity]


class PointSensitivities:
    """Immutable collection of point sensitivities."""

    __slots__ = ("_sensitivities",)

    def __init__(self, sensitivities: Iterable[PointSensitivity] = ()):
        self._sensitivities: Tuple[PointSensitivity, ...] = tuple(sensitivities)

    @classmethod
    def empty(cls) -> "PointSensitivities":
        return cls()

    @classmethod
    def of(cls, *sensitivities: PointSensitivity) -> "PointSensitivities":
        return cls(sensitivities)

    @property
    def sensitivities(self) -> Tuple[PointSensitivity, ...]:
        return self._sensitivities

    def is_empty(self) -> bool:
        return not self._sensitivities

    def combined_with(
        self, other: Union["PointSensitivities", PointSensitivity]
    ) -> "PointSensitivities":
        if isinstance(other, PointSensitivities):
            return PointSensitivities(self._sensitivities + other._sensitivities)
        return PointSensitivities(self._sensitivities + (other,))

    def multiplied_by(self, factor: float) -> "PointSensitivities":
        return PointSensitivities(s.multiplied_by(factor) for s in self._sensitivities)

    def normalized(self) -> "PointSensitivities":
        """Sort by curve and time, merging entries at the same point."""
        merged = {}
        for s in self._sensitivities:
            key = s._key()
            if key in merged:
                merged[key] = merged[key].with_sensitivity(
                    merged[key].sensitivity + s.sensitivity
                )
            else:
                merged[key] = s
        return PointSensitivities(merged[key] for key in sorted(merged))

    def __len__(self) -> int:
        return len(self._sensitivities)

    def __iter__(self) -> Iterator[PointSensitivity]:
        return iter(self._sensitivities)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointSensitivities):
            return NotImplemented
        return self._sensitivities == other._sensitivities

    def __repr__(self) -> str:
        return f"PointSensitivities({list(self._sensitivities)!r})"
