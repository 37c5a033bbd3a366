"""Named physical constants and their pre-encoded LaTeX expansions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from .tokens import encode


@dataclass(frozen=True, slots=True)
class Constant:
    """A constant name as typed in the widget plus its unit-bearing value.

    ``expansion`` is ``raw`` passed through :func:`~.tokens.encode`, so later
    substitution passes cannot corrupt the markup inside it.
    """

    name: str
    label: str
    raw: str
    expansion: str


_RAW_CONSTANTS: tuple[tuple[str, str, str], ...] = (
    ("\\pi", "pi", repr(math.pi)),
    ("k_B", "Boltzmann constant", "1.380649 \\cdot 10^{-23} \\operatorname{J} \\operatorname{K}^{-1}"),
    (
        "\\epsilon_0",
        "vacuum permittivity",
        "8.85418782 \\cdot 10^{-12} {\\operatorname{m}^{-3}} {\\operatorname{kg}^{-1}} "
        "{\\operatorname{s}^4} {\\operatorname{A}^2}",
    ),
    ("c", "speed of light", "299792458 \\operatorname{m} \\operatorname{s}^{-1}"),
    ("e", "Euler's number", repr(math.e)),
)


def build_constant_table(entries: Iterable[tuple[str, str, str]] = _RAW_CONSTANTS) -> Mapping[str, Constant]:
    table: dict[str, Constant] = {}
    for name, label, raw in entries:
        if name in table:
            raise ValueError(f"Duplicate constant '{name}'")
        table[name] = Constant(name=name, label=label, raw=raw, expansion=encode(raw))
    for constant in table.values():
        for name in table:
            if name in constant.expansion:
                raise ValueError(f"Constant '{name}' appears inside the expansion of '{constant.name}'")
    return MappingProxyType(table)


CONSTANTS: Mapping[str, Constant] = build_constant_table()


__all__ = ["CONSTANTS", "Constant", "build_constant_table"]
