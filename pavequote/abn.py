"""
Australian Business Number (ABN) checksum validation and formatting.

Algorithm published by the Australian Business Register:
1. Subtract 1 from the first (left-most) digit.
2. Multiply each digit by its position weight.
3. Sum the products.
4. The ABN is valid if the sum is divisible by 89.

None of these functions raise. An invalid ABN is reported as False so
callers can show a form error instead of unwinding.
"""

import re

ABN_LENGTH = 11
ABN_WEIGHTS = (10, 1, 3, 5, 7, 9, 11, 13, 15, 17, 19)
ABN_MODULUS = 89

_NON_DIGIT = re.compile(r"[^0-9]")


def normalize_digits(value) -> str:
    """Strip every non-digit character. None becomes an empty string."""
    if value is None:
        return ""
    return _NON_DIGIT.sub("", str(value))


def abn_checksum(digits: str) -> int:
    """Weighted sum for an 11-digit string (first digit reduced by 1)."""
    total = (int(digits[0]) - 1) * ABN_WEIGHTS[0]
    for digit, weight in zip(digits[1:], ABN_WEIGHTS[1:]):
        total += int(digit) * weight
    return total


def is_valid_abn(value) -> bool:
    """True if the value normalizes to 11 digits and passes the mod-89 check."""
    digits = normalize_digits(value)
    if len(digits) != ABN_LENGTH:
        return False
    return abn_checksum(digits) % ABN_MODULUS == 0


def format_abn(value):
    """
    Format as 'XX XXX XXX XXX' for display.

    Anything that doesn't normalize to exactly 11 digits is returned as given,
    so the caller still sees what the user typed.
    """
    digits = normalize_digits(value)
    if len(digits) != ABN_LENGTH:
        return value
    return f"{digits[0:2]} {digits[2:5]} {digits[5:8]} {digits[8:11]}"


def abn_for_storage(value) -> str:
    """Digits only, the machine-readable form returned next to the display form."""
    return normalize_digits(value)
