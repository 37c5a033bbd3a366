import pytest

from plugins.physics_calculator.core import DERIVED_UNITS, Quantity, compute


def test_simple_sum_end_to_end():
    result = compute("2+2")
    assert result.ok
    assert result.normalized == "2+2"
    assert result.quantity == Quantity(4.0)
    assert result.rendered == "= 4 "


def test_speed_of_light_end_to_end():
    result = compute("c")
    assert result.quantity.magnitude == 299792458.0
    assert result.quantity.units.to_symbols() == {"s": -1, "m": 1}
    assert result.rendered == "= 2.9979\\times 10^{8} \\frac{\\operatorname{m}}{\\operatorname{s}}"


def test_force_per_area_end_to_end():
    result = compute("\\frac{6\\operatorname{N}}{3\\operatorname{m}^2}")
    assert result.quantity.units == DERIVED_UNITS["Pa"].vector
    assert result.quantity.magnitude == pytest.approx(2.0)
    assert result.rendered == "= 2 \\frac{\\operatorname{kg}}{{\\operatorname{s}}^{2}\\operatorname{m}}"


def test_inverse_frequency_is_time():
    result = compute("\\frac{1}{\\operatorname{Hz}}")
    assert result.rendered == "= 1 \\operatorname{s}"


def test_length_plus_time_fails():
    result = compute("3\\operatorname{m}+2\\operatorname{s}")
    assert not result.ok
    assert result.quantity is None
    assert result.rendered is None
    assert "Cannot add" in result.error
    assert result.to_dict()["error"] == result.error


def test_overlong_input_is_rejected():
    result = compute("1+" * 10 + "1", max_length=5)
    assert result.error == "Expression is too long"


def test_result_serialises_units_in_canonical_order():
    payload = compute("\\operatorname{N}\\cdot\\operatorname{m}").to_dict()
    assert list(payload["units"]) == ["s", "m", "kg"]
    assert payload["units"] == {"s": -2, "m": 2, "kg": 1}
