"""Base dimensions, dimension vectors and the derived SI unit table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping


class BaseDimension(Enum):
    """The seven SI base dimensions in canonical order."""

    TIME = ("s", "[time]")
    LENGTH = ("m", "[length]")
    MASS = ("kg", "[mass]")
    CURRENT = ("A", "[current]")
    AMOUNT = ("mol", "[substance]")
    LUMINOUS_INTENSITY = ("cd", "[luminosity]")
    TEMPERATURE = ("K", "[temperature]")

    def __init__(self, symbol: str, pint_dimension: str) -> None:
        self.symbol = symbol
        self.pint_dimension = pint_dimension

    @classmethod
    def from_symbol(cls, symbol: str) -> "BaseDimension":
        try:
            return _BY_SYMBOL[symbol]
        except KeyError as exc:
            raise KeyError(f"Unknown base unit '{symbol}'") from exc

    @classmethod
    def from_pint_dimension(cls, name: str) -> "BaseDimension":
        try:
            return _BY_PINT_DIMENSION[name]
        except KeyError as exc:
            raise KeyError(f"Unsupported dimension '{name}'") from exc


_ORDER = {dimension: index for index, dimension in enumerate(BaseDimension)}
_BY_SYMBOL = {dimension.symbol: dimension for dimension in BaseDimension}
_BY_PINT_DIMENSION = {dimension.pint_dimension: dimension for dimension in BaseDimension}

BASE_UNITS: tuple[str, ...] = tuple(dimension.symbol for dimension in BaseDimension)


class DimensionVector(Mapping[BaseDimension, int]):
    """Immutable exponent-per-base-dimension signature.

    Zero exponents are dropped on construction and iteration always follows the
    canonical :class:`BaseDimension` order, so two vectors with the same
    non-zero entries compare equal and format identically.
    """

    __slots__ = ("_items",)

    def __init__(self, exponents: Mapping[BaseDimension, int] | None = None) -> None:
        cleaned: dict[BaseDimension, int] = {}
        for dimension, exponent in (exponents or {}).items():
            if not isinstance(dimension, BaseDimension):
                raise TypeError("DimensionVector keys must be BaseDimension members")
            if isinstance(exponent, bool) or int(exponent) != exponent:
                raise ValueError(f"Exponent for {dimension.symbol} must be an integer")
            if exponent:
                cleaned[dimension] = int(exponent)
        self._items = dict(sorted(cleaned.items(), key=lambda item: _ORDER[item[0]]))

    @classmethod
    def from_symbols(cls, exponents: Mapping[str, int]) -> "DimensionVector":
        return cls({BaseDimension.from_symbol(symbol): power for symbol, power in exponents.items()})

    def __getitem__(self, dimension: BaseDimension) -> int:
        return self._items[dimension]

    def __iter__(self) -> Iterator[BaseDimension]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DimensionVector):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._items.items()))

    def __repr__(self) -> str:
        return f"DimensionVector({self.to_symbols()!r})"

    def __mul__(self, other: "DimensionVector") -> "DimensionVector":
        combined = dict(self._items)
        for dimension, exponent in other.items():
            combined[dimension] = combined.get(dimension, 0) + exponent
        return DimensionVector(combined)

    def __truediv__(self, other: "DimensionVector") -> "DimensionVector":
        return self * (other ** -1)

    def __pow__(self, power: int) -> "DimensionVector":
        if isinstance(power, bool) or not isinstance(power, int):
            raise TypeError("DimensionVector powers must be integers")
        return DimensionVector({dimension: exponent * power for dimension, exponent in self._items.items()})

    @property
    def is_dimensionless(self) -> bool:
        return not self._items

    def to_symbols(self) -> dict[str, int]:
        """Return ``{"kg": 1, "m": 1, ...}`` in canonical order."""

        return {dimension.symbol: exponent for dimension, exponent in self._items.items()}


DIMENSIONLESS = DimensionVector()


@dataclass(frozen=True, slots=True)
class DerivedUnit:
    """A named SI unit expressible as a product of base-dimension powers."""

    symbol: str
    name: str
    vector: DimensionVector


def _derived(symbol: str, name: str, **exponents: int) -> DerivedUnit:
    return DerivedUnit(symbol=symbol, name=name, vector=DimensionVector.from_symbols(exponents))


# https://en.wikipedia.org/wiki/MKS_system_of_units#Derived_units
_DERIVED_UNITS: tuple[DerivedUnit, ...] = (
    _derived("Hz", "hertz", s=-1),
    _derived("N", "newton", kg=1, m=1, s=-2),
    _derived("Pa", "pascal", kg=1, m=-1, s=-2),
    _derived("J", "joule", kg=1, m=2, s=-2),
    _derived("W", "watt", kg=1, m=2, s=-3),
    _derived("C", "coulomb", s=1, A=1),
    _derived("V", "volt", kg=1, m=2, s=-3, A=-1),
    _derived("F", "farad", kg=-1, m=-2, s=4, A=2),
    _derived("S", "siemens", kg=-1, m=-2, s=3, A=2),
    _derived("Wb", "weber", kg=1, m=2, s=-2, A=-1),
    _derived("T", "tesla", kg=1, s=-2, A=-1),
    _derived("H", "henry", kg=1, m=2, s=-2, A=-2),
)

DERIVED_UNITS: Mapping[str, DerivedUnit] = MappingProxyType({unit.symbol: unit for unit in _DERIVED_UNITS})

SUPPORTED_FUNCTIONS: tuple[str, ...] = ("sin", "cos", "tan", "log", "ln", "sqrt")


def operator_names(derived_units: Mapping[str, DerivedUnit] | None = None) -> tuple[str, ...]:
    """Return every word the math widget should treat as an atomic operator name."""

    table = DERIVED_UNITS if derived_units is None else derived_units
    return BASE_UNITS + tuple(table.keys()) + SUPPORTED_FUNCTIONS


__all__ = [
    "BASE_UNITS",
    "BaseDimension",
    "DERIVED_UNITS",
    "DIMENSIONLESS",
    "DerivedUnit",
    "DimensionVector",
    "SUPPORTED_FUNCTIONS",
    "operator_names",
]
