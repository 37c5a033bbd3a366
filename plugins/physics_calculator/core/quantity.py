"""Evaluated physical quantities."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Mapping

from .units import DIMENSIONLESS, DimensionVector


@dataclass(frozen=True, slots=True)
class Quantity:
    """A finite magnitude in SI base units plus its dimension vector."""

    magnitude: float
    units: DimensionVector = field(default=DIMENSIONLESS)

    def __post_init__(self) -> None:
        if isinstance(self.magnitude, bool) or not isinstance(self.magnitude, (int, float)):
            raise ValueError("Quantity magnitude must be a real number")
        try:
            magnitude = float(self.magnitude)
        except OverflowError as exc:
            raise ValueError("Quantity magnitude must be finite") from exc
        if math.isnan(magnitude) or math.isinf(magnitude):
            raise ValueError("Quantity magnitude must be finite")
        if not isinstance(self.units, DimensionVector):
            raise ValueError("Quantity units must be a DimensionVector")
        object.__setattr__(self, "magnitude", magnitude)

    @classmethod
    def from_symbols(cls, magnitude: float, units: Mapping[str, int] | None = None) -> "Quantity":
        return cls(magnitude, DimensionVector.from_symbols(units or {}))

    @property
    def is_dimensionless(self) -> bool:
        return self.units.is_dimensionless

    def to_dict(self) -> dict[str, object]:
        return {"magnitude": self.magnitude, "units": self.units.to_symbols()}


__all__ = ["Quantity"]
