import pytest

from plugins.physics_calculator.core.constants import CONSTANTS, build_constant_table
from plugins.physics_calculator.core.normalizer import (
    brace_exponents,
    expand_derived_units,
    expand_unit,
    normalize,
    substitute_constants,
)
from plugins.physics_calculator.core.tokens import decode, encode
from plugins.physics_calculator.core.units import DerivedUnit, DimensionVector

SPEED_OF_LIGHT = "{299792458 \\operatorname{m} \\operatorname{s}^{-1}}"
NEWTON = "{{\\operatorname{s}}^{-2}{\\operatorname{m}}^{1}{\\operatorname{kg}}^{1}}"


def test_multi_digit_exponents_are_braced():
    assert brace_exponents("x^12") == "x^{12}"
    assert brace_exponents("2^3+4^{5}") == "2^{3}+4^{5}"


def test_exponent_bracing_is_idempotent():
    once = brace_exponents("10^23 \\cdot 2^{-4}")
    assert brace_exponents(once) == once


def test_plain_arithmetic_is_untouched():
    assert normalize("2+2") == "2+2"


def test_sizing_markers_are_removed():
    assert normalize("\\left(1+2\\right)\\cdot 3") == "(1+2)\\cdot 3"


def test_constant_is_substituted_in_a_group():
    assert normalize("c") == SPEED_OF_LIGHT
    assert normalize("2c") == "2" + SPEED_OF_LIGHT


def test_control_words_survive_single_letter_constants():
    assert normalize("\\cdot") == "\\cdot"
    assert normalize("\\cos(0)") == "\\cos(0)"
    assert normalize("\\sec") == "\\sec"


def test_unit_names_are_not_read_as_constants():
    assert normalize("\\operatorname{cd}") == "\\operatorname{cd}"


def test_longer_constant_names_win():
    result = normalize("\\epsilon_0")
    assert result.startswith("{8.85418782 \\cdot 10^{-12}")
    assert "2.718281828459045" not in result


def test_pi_is_not_matched_inside_longer_commands():
    assert normalize("\\pi") == "{3.141592653589793}"
    assert normalize("\\pitchfork") == "\\pitchfork"


def test_substitution_ignores_table_order():
    entries = [(constant.name, constant.label, constant.raw) for constant in CONSTANTS.values()]
    reversed_table = build_constant_table(reversed(entries))
    text = encode("2\\pi k_B \\epsilon_0 c e \\frac{c}{e}")
    assert substitute_constants(text, reversed_table) == substitute_constants(text, CONSTANTS)


def test_expansions_are_not_rescanned():
    result = decode(substitute_constants(encode("c")))
    assert result == SPEED_OF_LIGHT


def test_derived_units_expand_to_base_units():
    assert normalize("\\operatorname{N}") == NEWTON
    assert normalize("3\\operatorname{N}^{2}") == "3" + NEWTON + "^{2}"


def test_units_inside_constants_are_expanded():
    result = normalize("k_B")
    assert "\\operatorname{J}" not in result
    assert "{\\operatorname{kg}}^{1}" in result
    assert "\\operatorname{K}^{-1}" in result


def test_empty_vector_expands_to_nothing():
    assert expand_unit(DimensionVector()) == ""
    table = {"X": DerivedUnit(symbol="X", name="dummy", vector=DimensionVector())}
    assert expand_derived_units("2\\operatorname{X}", table) == "2"


def test_normalize_rejects_non_strings():
    with pytest.raises(TypeError):
        normalize(None)
