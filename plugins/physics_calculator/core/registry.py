"""Shared Pint registry helpers for the evaluator."""

from __future__ import annotations

from functools import lru_cache
from typing import Mapping

from pint import UnitRegistry

from .units import BaseDimension

# Widget symbol -> Pint unit name. Only base units reach the evaluator; derived
# units are expanded by the normalizer.
_PINT_BASE_UNITS: Mapping[str, str] = {
    BaseDimension.TIME.symbol: "second",
    BaseDimension.LENGTH.symbol: "meter",
    BaseDimension.MASS.symbol: "kilogram",
    BaseDimension.CURRENT.symbol: "ampere",
    BaseDimension.AMOUNT.symbol: "mole",
    BaseDimension.LUMINOUS_INTENSITY.symbol: "candela",
    BaseDimension.TEMPERATURE.symbol: "kelvin",
}


def _build_registry() -> UnitRegistry:
    # Offset units never appear: kelvin is the only temperature unit on offer.
    return UnitRegistry(autoconvert_offset_to_baseunit=False)


@lru_cache(maxsize=1)
def get_registry() -> UnitRegistry:
    """Return a singleton :class:`~pint.UnitRegistry` instance."""

    return _build_registry()


def pint_unit_name(symbol: str) -> str:
    """Return the Pint name for a base unit symbol such as ``kg``."""

    try:
        return _PINT_BASE_UNITS[symbol]
    except KeyError as exc:
        raise KeyError(f"Unknown base unit '{symbol}'") from exc


__all__ = ["get_registry", "pint_unit_name"]
