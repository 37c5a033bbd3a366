"""Text normalisation applied to widget LaTeX before evaluation."""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from .constants import CONSTANTS, Constant
from .tokens import PROTECTED_TOKENS, ProtectedToken, decode, encode, placeholder_for
from .units import DERIVED_UNITS, DerivedUnit, DimensionVector

_BARE_EXPONENT = re.compile(r"\^(\d+)")
_SIZING_MARKERS: tuple[str, ...] = ("\\left", "\\right")
_CONTROL_WORD = re.compile(r"\\[A-Za-z]+")


def brace_exponents(latex: str) -> str:
    """Rewrite ``x^12`` as ``x^{12}`` so the whole numeral is the exponent."""

    return _BARE_EXPONENT.sub(r"^{\1}", latex)


def strip_sizing_markers(latex: str) -> str:
    for marker in _SIZING_MARKERS:
        latex = latex.replace(marker, "")
    return latex


def _constant_pattern(
    constants: Mapping[str, Constant],
    tokens: Iterable[ProtectedToken],
) -> re.Pattern[str]:
    operatorname = re.escape(placeholder_for("\\operatorname", tokens))
    alternatives = [rf"(?P<operand>{operatorname}\{{[^{{}}]*\}})"]
    names = []
    for name in sorted(constants, key=len, reverse=True):
        escaped = re.escape(name)
        if _CONTROL_WORD.fullmatch(name):
            escaped += "(?![A-Za-z])"
        names.append(escaped)
    if names:
        alternatives.append("(?P<name>" + "|".join(names) + ")")
    # Any other control word is kept whole so its letters are never read as constants.
    alternatives.append(r"(?P<command>\\[A-Za-z]+)")
    return re.compile("|".join(alternatives))


_DEFAULT_PATTERN = _constant_pattern(CONSTANTS, PROTECTED_TOKENS)


def substitute_constants(
    encoded: str,
    constants: Mapping[str, Constant] | None = None,
    tokens: Iterable[ProtectedToken] = PROTECTED_TOKENS,
) -> str:
    """Replace every constant name in already-encoded text with ``{expansion}``.

    The scan is a single left-to-right pass; replacements are never rescanned.
    """

    if constants is None:
        table, pattern = CONSTANTS, _DEFAULT_PATTERN
    else:
        table, pattern = constants, _constant_pattern(constants, tokens)

    def _replace(match: re.Match[str]) -> str:
        if match.lastgroup != "name":
            return match.group(0)
        return "{" + table[match.group("name")].expansion + "}"

    return pattern.sub(_replace, encoded)


def expand_unit(vector: DimensionVector) -> str:
    """Render a vector as ``{\\operatorname{kg}}^{1}{\\operatorname{m}}^{1}...``."""

    if vector.is_dimensionless:
        return ""
    factors = "".join(
        "{\\operatorname{" + dimension.symbol + "}}^{" + str(exponent) + "}"
        for dimension, exponent in vector.items()
    )
    return "{" + factors + "}"


def expand_derived_units(latex: str, derived_units: Mapping[str, DerivedUnit] | None = None) -> str:
    table = DERIVED_UNITS if derived_units is None else derived_units
    for symbol, unit in table.items():
        latex = latex.replace("\\operatorname{" + symbol + "}", expand_unit(unit.vector))
    return latex


def normalize(
    latex: str,
    *,
    constants: Mapping[str, Constant] | None = None,
    derived_units: Mapping[str, DerivedUnit] | None = None,
) -> str:
    """Canonicalise widget LaTeX for the evaluator. Never fails for string input."""

    if not isinstance(latex, str):
        raise TypeError("latex must be a string")
    latex = brace_exponents(latex)
    latex = strip_sizing_markers(latex)
    latex = encode(latex)
    latex = substitute_constants(latex, constants)
    latex = decode(latex)
    return expand_derived_units(latex, derived_units)


__all__ = [
    "brace_exponents",
    "expand_derived_units",
    "expand_unit",
    "normalize",
    "strip_sizing_markers",
    "substitute_constants",
]
