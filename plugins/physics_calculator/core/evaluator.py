"""Unit-aware evaluation of normalised LaTeX expressions."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable

from pint import Quantity as PintQuantity
from pint.errors import DimensionalityError

from .quantity import Quantity
from .registry import get_registry, pint_unit_name
from .units import BASE_UNITS, BaseDimension, DimensionVector, SUPPORTED_FUNCTIONS


class EvaluationError(ValueError):
    """Raised when an expression cannot be parsed or evaluated."""


_TOKEN_PATTERN = re.compile(
    r"""
    (?P<space>\s+|\\[ ,;:!])
  | (?P<number>\d+(?:\.\d*)?|\.\d+)
  | (?P<command>\\[A-Za-z]+)
  | (?P<letter>[A-Za-z])
  | (?P<symbol>[-+*/^_{}()\[\]|=,.!<>])
    """,
    re.VERBOSE,
)

_IGNORED_COMMANDS = {"\\left", "\\right"}
_PRODUCT_COMMANDS = {"\\cdot", "\\times"}
_GROUPS = {"{": "}", "(": ")", "[": "]"}

_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "ln": math.log,
    "log": math.log10,
}


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str
    text: str
    position: int


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    position = 0
    while position < len(text):
        match = _TOKEN_PATTERN.match(text, position)
        if match is None:
            raise EvaluationError(f"Unexpected character '{text[position]}'")
        kind = match.lastgroup or "symbol"
        value = match.group(0)
        if kind != "space" and value not in _IGNORED_COMMANDS:
            tokens.append(_Token(kind, value, position))
        position = match.end()
    return tokens


def _describe(value: PintQuantity) -> str:
    if value.dimensionless:
        return "a dimensionless value"
    return f"a value in {value.to_base_units().units:~}"


class _Parser:
    """Recursive-descent parser that evaluates as it goes."""

    def __init__(self, tokens: list[_Token]) -> None:
        self.tokens = tokens
        self.index = 0
        self.registry = get_registry()

    # ---- Token helpers ---------------------------------------------------
    def _peek(self) -> _Token | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _next(self) -> _Token:
        token = self._peek()
        if token is None:
            raise EvaluationError("Unexpected end of expression")
        self.index += 1
        return token

    def _at(self, text: str) -> bool:
        token = self._peek()
        return token is not None and token.kind in {"symbol", "command"} and token.text == text

    def _expect(self, text: str) -> None:
        token = self._peek()
        if token is None:
            raise EvaluationError(f"Expected '{text}' before the end of the expression")
        if token.text != text:
            raise EvaluationError(f"Expected '{text}' but found '{token.text}'")
        self.index += 1

    def _split_number(self) -> _Token:
        """Consume a single digit, leaving the rest of the numeral in place.

        ``2^12`` in LaTeX raises to the first digit only.
        """

        token = self._next()
        if len(token.text) > 1:
            rest = _Token("number", token.text[1:], token.position + 1)
            self.index -= 1
            self.tokens[self.index] = rest
            token = _Token("number", token.text[0], token.position)
        return token

    def _starts_factor(self, token: _Token | None) -> bool:
        if token is None:
            return False
        if token.kind in {"number", "letter"}:
            return True
        if token.kind == "command":
            return token.text not in _PRODUCT_COMMANDS
        return token.text in _GROUPS

    # ---- Grammar -----------------------------------------------------------
    def parse(self) -> PintQuantity:
        if not self.tokens:
            raise EvaluationError("Expression is empty")
        value = self._expression()
        token = self._peek()
        if token is not None:
            raise EvaluationError(f"Unexpected '{token.text}'")
        return value

    def _expression(self) -> PintQuantity:
        value = self._term()
        while self._at("+") or self._at("-"):
            operator = self._next().text
            right = self._term()
            try:
                value = value + right if operator == "+" else value - right
            except DimensionalityError as exc:
                raise EvaluationError(
                    f"Cannot {'add' if operator == '+' else 'subtract'} "
                    f"{_describe(value)} and {_describe(right)}"
                ) from exc
        return value

    def _term(self) -> PintQuantity:
        value = self._signed()
        while True:
            token = self._peek()
            if token is None:
                break
            if token.text in _PRODUCT_COMMANDS or token.text == "*":
                self._next()
                value = value * self._signed()
            elif token.text == "/":
                self._next()
                value = self._divide(value, self._signed())
            elif self._starts_factor(token):
                value = value * self._power()
            else:
                break
        return value

    def _signed(self) -> PintQuantity:
        if self._at("-"):
            self._next()
            return -self._signed()
        if self._at("+"):
            self._next()
            return self._signed()
        return self._power()

    def _power(self) -> PintQuantity:
        base = self._primary()
        if self._at("^"):
            self._next()
            base = self._raise(base, self._argument())
        return base

    def _argument(self) -> PintQuantity:
        """A braced group or a single token, as taken by ``^``, ``\\frac`` and friends."""

        token = self._peek()
        if token is None:
            raise EvaluationError("Unexpected end of expression")
        if token.kind == "number":
            return self._number(self._split_number())
        if token.text == "{":
            return self._group()
        return self._primary()

    def _group(self) -> PintQuantity:
        opening = self._next().text
        closing = _GROUPS[opening]
        value = self._expression()
        self._expect(closing)
        return value

    def _primary(self) -> PintQuantity:
        token = self._peek()
        if token is None:
            raise EvaluationError("Unexpected end of expression")
        if token.kind == "number":
            return self._number(self._next())
        if token.text in _GROUPS:
            return self._group()
        if token.text == "|":
            self._next()
            value = self._expression()
            self._expect("|")
            return abs(value)
        if token.kind == "command":
            return self._command(self._next())
        if token.kind == "letter":
            raise EvaluationError(f"Unknown symbol '{token.text}'")
        raise EvaluationError(f"Unexpected '{token.text}'")

    def _command(self, token: _Token) -> PintQuantity:
        name = token.text[1:]
        if name == "frac":
            numerator = self._argument()
            return self._divide(numerator, self._argument())
        if name == "sqrt":
            degree = 2.0
            if self._at("["):
                self._next()
                degree = self._scalar(self._expression(), "Root degree must be dimensionless")
                self._expect("]")
            return self._root(self._argument(), degree)
        if name == "operatorname":
            return self._operator_name(self._word())
        if name in _FUNCTIONS:
            return self._function(name)
        raise EvaluationError(f"Unsupported command '{token.text}'")

    def _word(self) -> str:
        self._expect("{")
        letters: list[str] = []
        while self._peek() is not None and self._peek().kind == "letter":
            letters.append(self._next().text)
        self._expect("}")
        if not letters:
            raise EvaluationError("Empty operator name")
        return "".join(letters)

    def _operator_name(self, word: str) -> PintQuantity:
        if word in BASE_UNITS:
            return self.registry.Quantity(1.0, pint_unit_name(word))
        if word == "sqrt":
            return self._root(self._function_argument(), 2.0)
        if word in SUPPORTED_FUNCTIONS:
            return self._function(word)
        raise EvaluationError(f"Unknown unit or function '{word}'")

    def _function_argument(self) -> PintQuantity:
        """A bracketed group, or else the run of juxtaposed factors that follows.

        The run stops at explicit operators and at the next function name, so
        ``\\sin 2\\pi`` is ``sin(2 pi)`` while ``\\sin 2 \\cos 3`` stays a product.
        """

        token = self._peek()
        if token is not None and token.text in _GROUPS:
            return self._group()
        value = self._power()
        while self._starts_factor(self._peek()) and not self._starts_function(self._peek()):
            value = value * self._power()
        return value

    def _starts_function(self, token: _Token) -> bool:
        if token.kind != "command":
            return False
        if token.text[1:] in _FUNCTIONS:
            return True
        if token.text != "\\operatorname":
            return False
        letters: list[str] = []
        for item in self.tokens[self.index + 2 :]:
            if item.kind != "letter":
                break
            letters.append(item.text)
        return "".join(letters) in _FUNCTIONS

    def _function(self, name: str) -> PintQuantity:
        base: float | None = None
        if name == "log" and self._at("_"):
            self._next()
            base = self._scalar(self._argument(), "Logarithm base must be dimensionless")
        argument = self._scalar(self._function_argument(), f"Argument of {name} must be dimensionless")
        try:
            if base is not None:
                result = math.log(argument, base)
            else:
                result = _FUNCTIONS[name](argument)
        except (ValueError, ZeroDivisionError) as exc:
            raise EvaluationError(f"{name} is undefined for {argument:g}") from exc
        return self.registry.Quantity(float(result))

    # ---- Arithmetic ------------------------------------------------------
    def _number(self, token: _Token) -> PintQuantity:
        return self.registry.Quantity(float(token.text))

    def _scalar(self, value: PintQuantity, message: str) -> float:
        if not value.dimensionless:
            raise EvaluationError(message)
        magnitude = value.to("dimensionless").magnitude
        if isinstance(magnitude, complex):
            raise EvaluationError("Complex results are not supported")
        return float(magnitude)

    def _divide(self, numerator: PintQuantity, denominator: PintQuantity) -> PintQuantity:
        try:
            return numerator / denominator
        except ZeroDivisionError as exc:
            raise EvaluationError("Division by zero") from exc

    def _raise(self, base: PintQuantity, exponent: PintQuantity) -> PintQuantity:
        power = self._scalar(exponent, "Exponents must be dimensionless")
        if power.is_integer():
            power = int(power)
        try:
            result = base**power
        except (OverflowError, ZeroDivisionError) as exc:
            raise EvaluationError("Result is not finite") from exc
        if isinstance(result.magnitude, complex):
            raise EvaluationError("Complex results are not supported")
        return result

    def _root(self, value: PintQuantity, degree: float) -> PintQuantity:
        if degree == 0:
            raise EvaluationError("Root degree must be non-zero")
        if value.magnitude < 0:
            if degree == 2:
                raise EvaluationError("Square root of a negative value")
            if degree.is_integer() and int(degree) % 2:
                # Odd roots keep the sign: the real cube root of -8 is -2.
                return -self._raise(-value, self.registry.Quantity(1.0 / degree))
        return self._raise(value, self.registry.Quantity(1.0 / degree))


def _to_quantity(value: PintQuantity) -> Quantity:
    base = value.to_base_units()
    magnitude = base.magnitude
    if isinstance(magnitude, complex):
        raise EvaluationError("Complex results are not supported")
    magnitude = float(magnitude)
    if math.isnan(magnitude) or math.isinf(magnitude):
        raise EvaluationError("Result is not finite")
    exponents: dict[BaseDimension, int] = {}
    for dimension, exponent in base.dimensionality.items():
        power = round(float(exponent))
        if not math.isclose(float(exponent), power, abs_tol=1e-9):
            raise EvaluationError("Result has fractional unit powers")
        if power == 0:
            continue
        try:
            exponents[BaseDimension.from_pint_dimension(dimension)] = power
        except KeyError as exc:
            raise EvaluationError(str(exc)) from exc
    return Quantity(magnitude, DimensionVector(exponents))


def evaluate(text: str) -> Quantity:
    """Evaluate normalised LaTeX and return the result in SI base units."""

    if not isinstance(text, str):
        raise EvaluationError("Expression must be a string")
    try:
        value = _Parser(_tokenize(text)).parse()
    except RecursionError as exc:
        raise EvaluationError("Expression is nested too deeply") from exc
    return _to_quantity(value)


__all__ = ["EvaluationError", "evaluate"]
