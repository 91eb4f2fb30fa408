"""
Sensitivities to curve node parameters.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np
import pandas as pd


@dataclass(frozen=True, eq=False)
class CurveParameterSensitivity:
    """Sensitivity of a value to each node zero rate of one curve."""

    curve_name: str
    currency: str
    parameter_times: np.ndarray
    sensitivity: np.ndarray

    def __post_init__(self):
        times = np.asarray(self.parameter_times, dtype=float)
        values = np.asarray(self.sensitivity, dtype=float)
        if times.shape != values.shape:
            raise ValueError(
                f"Sensitivity of curve {self.curve_name} has {values.size} values "
                f"for {times.size} parameters"
            )
        object.__setattr__(self, "parameter_times", times)
        object.__setattr__(self, "sensitivity", values)

    @property
    def parameter_count(self) -> int:
        return self.sensitivity.size

    def multiplied_by(self, factor: float) -> "CurveParameterSensitivity":
        return CurveParameterSensitivity(
            self.curve_name, self.currency, self.parameter_times, self.sensitivity * factor
        )

    def plus(self, other: "CurveParameterSensitivity") -> "CurveParameterSensitivity":
        if other.curve_name != self.curve_name or other.parameter_count != self.parameter_count:
            raise ValueError(
                f"Cannot add sensitivity of {other.curve_name} to {self.curve_name}"
            )
        return CurveParameterSensitivity(
            self.curve_name,
            self.currency,
            self.parameter_times,
            self.sensitivity + other.sensitivity,
        )

    def total(self) -> float:
        return float(np.sum(self.sensitivity))


class CurveParameterSensitivities:
    """Collection of per-curve parameter sensitivities, keyed by curve name."""

    def __init__(self, sensitivities: Iterable[CurveParameterSensitivity] = ()):
        merged: Dict[str, CurveParameterSensitivity] = {}
        for s in sensitivities:
            merged[s.curve_name] = merged[s.curve_name].plus(s) if s.curve_name in merged else s
        self._sensitivities = merged

    @classmethod
    def empty(cls) -> "CurveParameterSensitivities":
        return cls()

    @property
    def curve_names(self) -> List[str]:
        return list(self._sensitivities)

    def get(self, curve_name: str) -> CurveParameterSensitivity:
        if curve_name not in self._sensitivities:
            raise ValueError(
                f"No sensitivity for curve {curve_name}. Available: {self.curve_names}"
            )
        return self._sensitivities[curve_name]

    def find(self, curve_name: str) -> Optional[CurveParameterSensitivity]:
        return self._sensitivities.get(curve_name)

    def combined_with(
        self, other: "CurveParameterSensitivities"
    ) -> "CurveParameterSensitivities":
        return CurveParameterSensitivities(list(self) + list(other))

    def multiplied_by(self, factor: float) -> "CurveParameterSensitivities":
        return CurveParameterSensitivities(s.multiplied_by(factor) for s in self)

    def equal_with_tolerance(
        self, other: "CurveParameterSensitivities", tolerance: float
    ) -> bool:
        """Compare node by node; a curve missing on one side counts as zeros."""
        names = set(self._sensitivities) | set(other._sensitivities)
        for name in names:
            mine = self.find(name)
            theirs = other.find(name)
            if mine is None or theirs is None:
                present = mine if mine is not None else theirs
                if np.any(np.abs(present.sensitivity) > tolerance):
                    return False
                continue
            if mine.parameter_count != theirs.parameter_count:
                return False
            if np.any(np.abs(mine.sensitivity - theirs.sensitivity) > tolerance):
                return False
        return True

    def to_frame(self) -> pd.DataFrame:
        """Long-format table with one row per curve node."""
        rows: List[Tuple[str, str, float, float]] = []
        for s in self:
            for t, value in zip(s.parameter_times, s.sensitivity):
                rows.append((s.curve_name, s.currency, float(t), float(value)))
        return pd.DataFrame(rows, columns=["curve", "currency", "time", "sensitivity"])

    def __len__(self) -> int:
        return len(self._sensitivities)

    def __iter__(self) -> Iterator[CurveParameterSensitivity]:
        return iter(self._sensitivities.values())

    def __repr__(self) -> str:
        return f"CurveParameterSensitivities({self.curve_names!r})"
