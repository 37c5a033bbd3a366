"""Facade for the physics calculator core."""

from __future__ import annotations

import re
from typing import Dict, List

from .constants import CONSTANTS, Constant
from .evaluator import EvaluationError, evaluate
from .formatter import format_quantity, format_units, to_scientific
from .normalizer import normalize
from .pipeline import ComputationResult, compute
from .quantity import Quantity
from .session import ERROR_INDICATOR, LatestResultGate, SessionStore, get_session_store
from .tokens import decode, encode
from .units import (
    BASE_UNITS,
    DERIVED_UNITS,
    SUPPORTED_FUNCTIONS,
    BaseDimension,
    DerivedUnit,
    DimensionVector,
    operator_names,
)


def list_derived_units() -> List[Dict[str, object]]:
    """Return the derived unit table in a JSON friendly shape."""

    return [
        {"symbol": unit.symbol, "name": unit.name, "units": unit.vector.to_symbols()}
        for unit in DERIVED_UNITS.values()
    ]


def list_constants() -> List[Dict[str, str]]:
    return [{"name": constant.name, "label": constant.label, "value": constant.raw} for constant in CONSTANTS.values()]


def auto_commands() -> List[str]:
    """Control words the widget should expand as the user types, e.g. ``pi`` for ``\\pi``."""

    words: List[str] = []
    for name in CONSTANTS:
        match = re.match(r"\\([A-Za-z]+)", name)
        if match and match.group(1) not in words:
            words.append(match.group(1))
    return words


def widget_config() -> Dict[str, object]:
    """Everything the math widget needs to treat unit and function names as atoms."""

    names = operator_names()
    return {
        "auto_operator_names": " ".join(names),
        "auto_commands": " ".join(auto_commands()),
        "operator_names": list(names),
        "functions": list(SUPPORTED_FUNCTIONS),
        "base_units": list(BASE_UNITS),
        "derived_units": list_derived_units(),
        "constants": list_constants(),
    }


__all__ = [
    "BASE_UNITS",
    "BaseDimension",
    "CONSTANTS",
    "ComputationResult",
    "Constant",
    "DERIVED_UNITS",
    "DerivedUnit",
    "DimensionVector",
    "ERROR_INDICATOR",
    "EvaluationError",
    "LatestResultGate",
    "Quantity",
    "SUPPORTED_FUNCTIONS",
    "SessionStore",
    "auto_commands",
    "compute",
    "decode",
    "encode",
    "evaluate",
    "format_quantity",
    "format_units",
    "get_session_store",
    "list_constants",
    "list_derived_units",
    "normalize",
    "operator_names",
    "to_scientific",
    "widget_config",
]
