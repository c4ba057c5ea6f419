"""
Australian GST rules — flat 10% on the ex-GST amount.

All arithmetic is Decimal so add/remove round-trips exactly for cent amounts.
Rounding to cents only happens in round_money(), at display boundaries.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from .tonnage import ZERO, as_decimal

GST_RATE = Decimal("0.10")
GST_MULTIPLIER = Decimal("1") + GST_RATE

MONEY = Decimal("0.01")


def to_decimal(value, field: str = "amount") -> Decimal:
    """
    Convert int/float/str/Decimal to Decimal. Floats go through str() so 0.1 stays 0.1.

    None counts as 0. Anything non-numeric or non-finite raises InvalidInput.
    """
    if value is None:
        return ZERO
    return as_decimal(value, field)


def round_money(amount) -> Decimal:
    """Round to cents, half-up. Presentation only."""
    return to_decimal(amount).quantize(MONEY, rounding=ROUND_HALF_UP)


def calculate_gst(amount_ex_gst) -> Decimal:
    """GST component of an ex-GST amount."""
    return to_decimal(amount_ex_gst, "amount_ex_gst") * GST_RATE


def add_gst(amount_ex_gst) -> Decimal:
    """Ex-GST → inc-GST."""
    return to_decimal(amount_ex_gst, "amount_ex_gst") * GST_MULTIPLIER


def remove_gst(amount_inc_gst) -> Decimal:
    """Inc-GST → ex-GST."""
    return to_decimal(amount_inc_gst, "amount_inc_gst") / GST_MULTIPLIER


@dataclass(frozen=True)
class GstBreakdown:
    ex_gst: Decimal
    gst: Decimal
    inc_gst: Decimal


def gst_breakdown(amount_ex_gst) -> GstBreakdown:
    ex_gst = to_decimal(amount_ex_gst, "amount_ex_gst")
    gst = calculate_gst(ex_gst)
    return GstBreakdown(ex_gst=ex_gst, gst=gst, inc_gst=ex_gst + gst)
