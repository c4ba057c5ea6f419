"""
Job pricing engine — area sections in, job quote totals out.

Pure math, no I/O. Each section is priced on its own; the job total is the
plain sum of section totals and GST is derived from the ex-GST sum. There is
no cross-section interaction, so re-running with the same sections and waste
factor always gives identical totals.

Input: sequence of area sections (AreaSection, schema objects, ORM rows or dicts)
Output: JobTotals
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from .gst import calculate_gst
from .tonnage import (
    DEFAULT_DENSITY,
    InvalidInput,
    ZERO,
    compute_section_price,
    compute_tonnage,
    non_negative,
    validate_density,
    validate_waste_factor,
)


@dataclass(frozen=True)
class AreaSection:
    """One scope-of-work line within a job."""
    name: str
    area_sqm: Decimal
    depth_mm: Decimal
    mix_type: Optional[str] = None
    specification: Optional[str] = None
    custom_specification: Optional[str] = None
    unit_price_per_tonne: Optional[Decimal] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class SectionQuote:
    name: str
    area_sqm: Decimal
    tonnage: Decimal
    total_price_ex_gst: Decimal


@dataclass(frozen=True)
class JobTotals:
    site_area_sqm: Decimal = ZERO
    total_tonnage: Decimal = ZERO
    quote_total_ex_gst: Decimal = ZERO
    quote_gst_amount: Decimal = ZERO
    quote_total_inc_gst: Decimal = ZERO
    sections: tuple = field(default_factory=tuple)

    def as_job_fields(self) -> dict:
        """The aggregate fields written back onto the job record."""
        return {
            "site_area_sqm": self.site_area_sqm,
            "total_tonnage": self.total_tonnage,
            "quote_total_ex_gst": self.quote_total_ex_gst,
            "quote_gst_amount": self.quote_gst_amount,
            "quote_total_inc_gst": self.quote_total_inc_gst,
        }


def _field(section, name: str, default=None):
    if isinstance(section, dict):
        return section.get(name, default)
    return getattr(section, name, default)


def _check_section(index: int, section) -> tuple:
    """Validate one section's numbers up front so no partial sums are produced."""
    label = _field(section, "name") or f"Section {index + 1}"
    try:
        area = non_negative(_field(section, "area_sqm", 0), "area_sqm")
        depth = non_negative(_field(section, "depth_mm", 0), "depth_mm")
        unit_price = _field(section, "unit_price_per_tonne")
        if unit_price is not None:
            unit_price = non_negative(unit_price, "unit_price_per_tonne")
    except InvalidInput as e:
        raise InvalidInput(f"{label}: {e}")
    return label, area, depth, unit_price


def compute_job_totals(sections, waste_factor_pct, density=DEFAULT_DENSITY) -> JobTotals:
    """
    Price every section and sum into job totals.

    An empty sequence gives all-zero totals. Raises InvalidInput before any
    summing if the waste factor, density or any section is out of range.
    """
    waste = validate_waste_factor(waste_factor_pct)
    density = validate_density(density)
    checked = [_check_section(i, s) for i, s in enumerate(sections)]

    quotes = []
    for label, area, depth, unit_price in checked:
        tonnage = compute_tonnage(area, depth, waste, density)
        quotes.append(SectionQuote(
            name=label,
            area_sqm=area,
            tonnage=tonnage,
            total_price_ex_gst=compute_section_price(tonnage, unit_price),
        ))

    site_area = sum((q.area_sqm for q in quotes), ZERO)
    total_tonnage = sum((q.tonnage for q in quotes), ZERO)
    total_ex_gst = sum((q.total_price_ex_gst for q in quotes), ZERO)
    gst_amount = calculate_gst(total_ex_gst)

    return JobTotals(
        site_area_sqm=site_area,
        total_tonnage=total_tonnage,
        quote_total_ex_gst=total_ex_gst,
        quote_gst_amount=gst_amount,
        quote_total_inc_gst=total_ex_gst + gst_amount,
        sections=tuple(quotes),
    )
