"""
Tonnage and section price calculator.

Tonnage = area × depth × density ÷ 1000 × (1 + waste/100)
"""

from decimal import Decimal

import pytest

from pavequote.tonnage import (
    DEFAULT_DENSITY,
    InvalidInput,
    compute_section_price,
    compute_tonnage,
)


# ============================================================
# Formula
# ============================================================

def test_tonnage_formula_exact():
    """100 m² × 40 mm × 2.4 ÷ 1000 × 1.05 = 10.08 t"""
    assert compute_tonnage(100, 40, 5) == Decimal("10.08")


def test_tonnage_zero_waste():
    """50 m² × 50 mm × 2.4 ÷ 1000 = 6.0 t"""
    assert compute_tonnage(50, 50, 0) == Decimal("6.0")


def test_tonnage_is_not_rounded():
    # 33.3 × 37 × 2.4 / 1000 × 1.05 = 3.104892
    assert compute_tonnage("33.3", 37, 5) == Decimal("3.104892")


def test_tonnage_accepts_floats_strings_and_decimals():
    expected = Decimal("10.1304")
    assert compute_tonnage(100.5, 40, 5) == expected
    assert compute_tonnage("100.5", "40", "5") == expected
    assert compute_tonnage(Decimal("100.5"), Decimal("40"), Decimal("5")) == expected


def test_density_is_a_parameter():
    assert DEFAULT_DENSITY == Decimal("2.4")
    # Denser mix → proportionally more tonnes
    assert compute_tonnage(100, 40, 0, density="2.5") == Decimal("10")


def test_zero_area_or_depth_gives_zero():
    assert compute_tonnage(0, 40, 5) == 0
    assert compute_tonnage(100, 0, 5) == 0


def test_upper_waste_bound_is_inclusive():
    assert compute_tonnage(100, 40, 100) == Decimal("19.2")


# ============================================================
# Guards
# ============================================================

@pytest.mark.parametrize("area, depth, waste", [
    (-1, 40, 5),
    (100, -1, 5),
    (100, 40, -0.5),
    (100, 40, 100.01),
    ("lots", 40, 5),
    (float("nan"), 40, 5),
    (float("inf"), 40, 5),
    (True, 40, 5),
])
def test_tonnage_rejects_bad_input(area, depth, waste):
    with pytest.raises(InvalidInput):
        compute_tonnage(area, depth, waste)


def test_tonnage_rejects_non_positive_density():
    with pytest.raises(InvalidInput):
        compute_tonnage(100, 40, 5, density=0)


def test_invalid_input_is_a_value_error():
    """Callers that only know about ValueError still catch it."""
    with pytest.raises(ValueError, match="area_sqm cannot be negative"):
        compute_tonnage(-1, 40, 5)


# ============================================================
# Section price
# ============================================================

def test_section_price():
    assert compute_section_price(Decimal("20.16"), 120) == Decimal("2419.20")


def test_section_price_without_unit_price_is_zero():
    assert compute_section_price(Decimal("20.16")) == 0
    assert compute_section_price(Decimal("20.16"), None) == 0
    assert compute_section_price(Decimal("20.16"), 0) == 0


def test_section_price_rejects_negative_values():
    with pytest.raises(InvalidInput):
        compute_section_price(10, -5)
    with pytest.raises(InvalidInput):
        compute_section_price(-10, 5)
