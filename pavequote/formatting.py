"""Display helpers — currency, tonnes, mix/specification labels, slugs.

Only used at display boundaries. Stored values are never rounded.
"""

import re
from decimal import Decimal, ROUND_HALF_UP

from .gst import round_money, to_decimal

MIX_TYPE_LABELS = {
    "ac10": "AC10 (10mm)",
    "ac14": "AC14 (14mm)",
    "ac20": "AC20 (20mm)",
    "sma": "SMA",
    "open_graded": "Open Graded",
    "warm_mix": "Warm Mix",
    "cold_mix": "Cold Mix",
    "recycled": "Recycled",
    "custom": "Custom Mix",
}

SPECIFICATION_LABELS = {
    "local_council": "Local Council",
    "rms_r116": "RMS R116 (NSW)",
    "rms_r117": "RMS R117 (NSW)",
    "rms_r118": "RMS R118 (NSW)",
    "vicroads_section_407": "VicRoads 407",
    "vicroads_section_408": "VicRoads 408",
    "mrwa_specification_504": "MRWA 504 (WA)",
    "tmr_mrts30": "TMR MRTS30 (QLD)",
    "dpti_part_228": "DPTI 228 (SA)",
    "custom": "Custom Specification",
}


def format_currency(amount) -> str:
    """AUD with thousands separators, e.g. '$4,948.02' or '-$12.50'."""
    if amount is None:
        return "$0.00"
    value = round_money(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_tonnage(tonnes, decimal_places: int = 2) -> str:
    if tonnes is None:
        return "0 tonnes"
    quantum = Decimal(1).scaleb(-decimal_places)
    value = to_decimal(tonnes, "tonnes").quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{value} tonnes"


def _enum_value(value) -> str:
    return str(getattr(value, "value", value))


def format_mix_type(mix_type) -> str:
    key = _enum_value(mix_type)
    return MIX_TYPE_LABELS.get(key, key.upper())


def format_specification(specification, custom_specification=None) -> str:
    """Label for a specification standard. Custom shows the free-text description when given."""
    key = _enum_value(specification)
    if key == "custom" and custom_specification:
        return custom_specification
    return SPECIFICATION_LABELS.get(key, key.upper())


def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
