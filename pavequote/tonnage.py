"""
Asphalt tonnage and section pricing.

Tonnage = area (m²) × depth (mm) × density ÷ 1000 × (1 + waste factor / 100)

Density 2.4 is the standard compacted-asphalt factor: 1 m² at 1 mm is
0.001 m³, and at 2.4 t/m³ that is 0.0024 t. Kept as a parameter so
mix-specific densities can be passed in later.

No rounding here. Stored and summed values keep full precision; round only
when displaying (see gst.round_money / formatting.format_tonnage).
"""

from decimal import Decimal, InvalidOperation

DEFAULT_DENSITY = Decimal("2.4")
MM_PER_M = Decimal("1000")
HUNDRED = Decimal("100")
ZERO = Decimal("0")

MIN_WASTE_FACTOR_PCT = Decimal("0")
MAX_WASTE_FACTOR_PCT = Decimal("100")


class InvalidInput(ValueError):
    """Negative, out-of-range or non-numeric input to a tonnage/pricing calculation."""


def as_decimal(value, field: str) -> Decimal:
    """Coerce a user-supplied number to a finite Decimal or raise InvalidInput."""
    if isinstance(value, bool):
        raise InvalidInput(f"{field} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError, TypeError):
            raise InvalidInput(f"{field} must be a number, got {value!r}")
    if not result.is_finite():
        raise InvalidInput(f"{field} must be a finite number, got {value!r}")
    return result


def validate_waste_factor(waste_factor_pct) -> Decimal:
    waste = as_decimal(waste_factor_pct, "waste_factor_pct")
    if waste < MIN_WASTE_FACTOR_PCT or waste > MAX_WASTE_FACTOR_PCT:
        raise InvalidInput(
            f"waste_factor_pct must be between {MIN_WASTE_FACTOR_PCT} and "
            f"{MAX_WASTE_FACTOR_PCT}, got {waste}"
        )
    return waste


def validate_density(density) -> Decimal:
    value = as_decimal(density, "density")
    if value <= ZERO:
        raise InvalidInput(f"density must be greater than 0, got {value}")
    return value


def non_negative(value, field: str) -> Decimal:
    result = as_decimal(value, field)
    if result < ZERO:
        raise InvalidInput(f"{field} cannot be negative, got {result}")
    return result


def compute_tonnage(area_sqm, depth_mm, waste_factor_pct, density=DEFAULT_DENSITY) -> Decimal:
    """
    Tonnes of asphalt for one section, waste included.

    Returns 0 when area or depth is 0. Raises InvalidInput for negative
    area/depth, a waste factor outside [0, 100], or a non-positive density.
    """
    area = non_negative(area_sqm, "area_sqm")
    depth = non_negative(depth_mm, "depth_mm")
    waste = validate_waste_factor(waste_factor_pct)
    density = validate_density(density)

    if area == ZERO or depth == ZERO:
        return ZERO

    return area * depth * density / MM_PER_M * (1 + waste / HUNDRED)


def compute_section_price(tonnage, unit_price_per_tonne=None) -> Decimal:
    """Ex-GST price for a section. An absent or zero unit price gives 0."""
    tonnes = non_negative(tonnage, "tonnage")
    if unit_price_per_tonne is None:
        return ZERO
    unit_price = non_negative(unit_price_per_tonne, "unit_price_per_tonne")
    if unit_price == ZERO:
        return ZERO
    return tonnes * unit_price
