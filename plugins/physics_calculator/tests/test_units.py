import pytest

from plugins.physics_calculator.core.registry import get_registry
from plugins.physics_calculator.core.units import (
    BASE_UNITS,
    DERIVED_UNITS,
    SUPPORTED_FUNCTIONS,
    BaseDimension,
    DimensionVector,
    operator_names,
)


def test_zero_exponents_are_dropped():
    vector = DimensionVector.from_symbols({"m": 1, "s": 0})
    assert vector.to_symbols() == {"m": 1}
    assert vector == DimensionVector.from_symbols({"m": 1})
    assert DimensionVector.from_symbols({"kg": 0}).is_dimensionless


def test_iteration_follows_canonical_order():
    vector = DimensionVector.from_symbols({"kg": 1, "m": 1, "s": -2})
    assert [dimension.symbol for dimension in vector] == ["s", "m", "kg"]


def test_vector_arithmetic():
    newton = DERIVED_UNITS["N"].vector
    area = DimensionVector.from_symbols({"m": 2})
    assert newton / area == DERIVED_UNITS["Pa"].vector
    assert newton * DimensionVector.from_symbols({"m": 1}) == DERIVED_UNITS["J"].vector
    assert (area**-1).to_symbols() == {"m": -2}
    assert (newton / newton).is_dimensionless


def test_vector_rejects_fractional_exponents():
    with pytest.raises(ValueError):
        DimensionVector.from_symbols({"m": 1.5})
    with pytest.raises(KeyError):
        DimensionVector.from_symbols({"furlong": 1})


@pytest.mark.parametrize("symbol", sorted(DERIVED_UNITS))
def test_derived_units_match_pint_definitions(symbol):
    unit = DERIVED_UNITS[symbol]
    dimensionality = get_registry().Unit(unit.name).dimensionality
    expected = DimensionVector(
        {BaseDimension.from_pint_dimension(name): int(power) for name, power in dimensionality.items()}
    )
    assert unit.vector == expected


def test_operator_names_cover_units_and_functions():
    names = operator_names()
    assert names[: len(BASE_UNITS)] == BASE_UNITS
    assert {"N", "Wb", "H"}.issubset(names)
    assert set(SUPPORTED_FUNCTIONS).issubset(names)
    assert len(names) == len(BASE_UNITS) + len(DERIVED_UNITS) + len(SUPPORTED_FUNCTIONS)
