"""
Job pricing engine — aggregate totals across area sections.

Tests:
1.    End-to-end two-section quote
2-3.  Empty job, additivity
4-5.  Determinism and input shapes (dataclass, dict, ORM-like objects)
6-8.  Fail-fast validation
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from pavequote.pricing_engine import AreaSection, JobTotals, compute_job_totals
from pavequote.tonnage import InvalidInput, compute_section_price, compute_tonnage


def _two_sections():
    return [
        AreaSection(name="Car park", area_sqm=Decimal("200"), depth_mm=Decimal("40"),
                    mix_type="ac14", unit_price_per_tonne=Decimal("120")),
        AreaSection(name="Driveway", area_sqm=Decimal("150"), depth_mm=Decimal("50"),
                    mix_type="ac20", unit_price_per_tonne=Decimal("110")),
    ]


# ============================================================
# Totals
# ============================================================

def test_end_to_end_two_sections():
    totals = compute_job_totals(_two_sections(), 5)

    first, second = totals.sections
    assert first.tonnage == Decimal("20.16")
    assert first.total_price_ex_gst == Decimal("2419.20")
    assert second.tonnage == Decimal("18.9")
    assert second.total_price_ex_gst == Decimal("2079.00")

    assert totals.site_area_sqm == Decimal("350")
    assert totals.total_tonnage == Decimal("39.06")
    assert totals.quote_total_ex_gst == Decimal("4498.20")
    assert totals.quote_gst_amount == Decimal("449.82")
    assert totals.quote_total_inc_gst == Decimal("4948.02")


def test_empty_job_is_all_zero():
    for waste in (0, 5, 20):
        totals = compute_job_totals([], waste)
        assert totals.site_area_sqm == 0
        assert totals.total_tonnage == 0
        assert totals.quote_total_ex_gst == 0
        assert totals.quote_gst_amount == 0
        assert totals.quote_total_inc_gst == 0
        assert totals.sections == ()


def test_totals_are_sum_of_individual_sections():
    sections = _two_sections() + [
        AreaSection(name="Patch", area_sqm=Decimal("12.5"), depth_mm=Decimal("75")),
    ]
    totals = compute_job_totals(sections, "7.5")

    tonnages = [compute_tonnage(s.area_sqm, s.depth_mm, "7.5") for s in sections]
    prices = [compute_section_price(t, s.unit_price_per_tonne) for t, s in zip(tonnages, sections)]
    assert totals.total_tonnage == sum(tonnages)
    assert totals.quote_total_ex_gst == sum(prices)
    # Section with no unit price still contributes tonnage but no dollars
    assert totals.sections[2].tonnage > 0
    assert totals.sections[2].total_price_ex_gst == 0


def test_rerun_is_identical():
    """Resubmitting the same sections (full replace) must give the same totals."""
    first = compute_job_totals(_two_sections(), 5)
    second = compute_job_totals(_two_sections(), 5)
    assert first == second
    assert first.as_job_fields() == second.as_job_fields()


def test_accepts_dicts_and_row_objects():
    as_dicts = [
        {"name": "Car park", "area_sqm": 200, "depth_mm": 40, "unit_price_per_tonne": 120},
        {"name": "Driveway", "area_sqm": "150", "depth_mm": "50", "unit_price_per_tonne": "110"},
    ]
    as_rows = [SimpleNamespace(**d) for d in as_dicts]
    expected = compute_job_totals(_two_sections(), 5).as_job_fields()
    assert compute_job_totals(as_dicts, 5).as_job_fields() == expected
    assert compute_job_totals(as_rows, 5).as_job_fields() == expected


def test_job_fields_for_write_back():
    fields = compute_job_totals(_two_sections(), 5).as_job_fields()
    assert set(fields) == {
        "site_area_sqm", "total_tonnage", "quote_total_ex_gst",
        "quote_gst_amount", "quote_total_inc_gst",
    }
    assert JobTotals().as_job_fields()["quote_total_inc_gst"] == 0


# ============================================================
# Fail fast
# ============================================================

def test_negative_section_names_the_section():
    sections = _two_sections() + [
        AreaSection(name="Bad patch", area_sqm=Decimal("-3"), depth_mm=Decimal("40")),
    ]
    with pytest.raises(InvalidInput, match="Bad patch: area_sqm cannot be negative"):
        compute_job_totals(sections, 5)


def test_unnamed_section_uses_position():
    with pytest.raises(InvalidInput, match="Section 2"):
        compute_job_totals([{"area_sqm": 1, "depth_mm": 40}, {"area_sqm": 1, "depth_mm": -40}], 5)


@pytest.mark.parametrize("waste", [-1, 101])
def test_waste_factor_out_of_range(waste):
    with pytest.raises(InvalidInput):
        compute_job_totals(_two_sections(), waste)
    # Even an empty job rejects a bad waste factor
    with pytest.raises(InvalidInput):
        compute_job_totals([], waste)
