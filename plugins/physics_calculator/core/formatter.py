"""LaTeX rendering of evaluated quantities."""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal

from .quantity import Quantity
from .units import DimensionVector

_COEFFICIENT_STEP = Decimal("0.0001")


def _trim(value: Decimal) -> str:
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in {"-0", ""} else text


def to_scientific(value: float) -> str:
    """Render ``value`` as ``c\\times 10^{e}`` with a four-decimal coefficient.

    The coefficient is rounded half-to-even. ``\\times 10^{0}`` is omitted.
    """

    if value == 0:
        return "0"
    number = Decimal(repr(float(value)))
    exponent = number.adjusted()
    coefficient = number.scaleb(-exponent).quantize(_COEFFICIENT_STEP, rounding=ROUND_HALF_EVEN)
    if abs(coefficient) >= 10:
        exponent += 1
        coefficient = number.scaleb(-exponent).quantize(_COEFFICIENT_STEP, rounding=ROUND_HALF_EVEN)
    text = _trim(coefficient)
    if exponent == 0:
        return text
    return f"{text}\\times 10^{{{exponent}}}"


def _unit(symbol: str) -> str:
    return "\\operatorname{" + symbol + "}"


def format_units(units: DimensionVector) -> str:
    """Arrange unit powers into a numerator/denominator ``\\frac``."""

    numerator = ""
    denominator = ""
    for dimension, power in units.items():
        unit = _unit(dimension.symbol)
        if power == 1:
            numerator += unit
        elif power > 1:
            numerator += f"{{{unit}}}^{{{power}}}"
        elif power == -1:
            denominator += unit
        elif power < -1:
            denominator += f"{{{unit}}}^{{{-power}}}"

    if numerator and denominator:
        return f"\\frac{{{numerator}}}{{{denominator}}}"
    if numerator:
        return numerator
    if denominator:
        return f"\\frac{{1}}{{{denominator}}}"
    return ""


def format_quantity(quantity: Quantity) -> str:
    """Return ``"= <scientific> <units>"``; dimensionless results keep the trailing space."""

    return "= " + to_scientific(quantity.magnitude) + " " + format_units(quantity.units)


__all__ = ["format_quantity", "format_units", "to_scientific"]
