"""Display Formatter - bounded, artifact-free display strings for numbers.

Invariants:
    - NaN renders the sentinel, infinities render the ∞ glyph
    - |v| > LARGE_THRESHOLD or 0 < |v| < SMALL_THRESHOLD renders scientific
      (6 fraction digits, exponent without '+' or zero padding)
    - Fixed-point output has trailing zeros and a bare trailing dot stripped,
      integer part grouped by thousands with ','
    - clamp_length() collapses any text with more than MAX_LENGTH digit
      characters to scientific form
    - Fixed-point and scientific rounding resolve ties half away from zero,
      computed on the exact binary value of the float
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from tapecalc.core.domain_types import (
    DISPLAY_DECIMALS,
    INFINITY_GLYPH,
    LARGE_THRESHOLD,
    MAX_LENGTH,
    NOT_A_NUMBER,
    SCIENTIFIC_DECIMALS,
    SMALL_THRESHOLD,
)


def _round_half_up(value: Decimal, exponent: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(exponent), rounding=ROUND_HALF_UP)


def to_scientific(value: float) -> str:
    """Normalized scientific notation: '1.234568e12', '-1.000000e-11'."""
    exact = Decimal(value)
    if exact.is_zero():
        return f"{0:.{SCIENTIFIC_DECIMALS}f}e0"
    exponent = exact.adjusted()
    rounded = _round_half_up(exact, exponent - SCIENTIFIC_DECIMALS)
    if rounded.adjusted() > exponent:
        exponent += 1
    mantissa = rounded.scaleb(-exponent)
    return f"{mantissa:.{SCIENTIFIC_DECIMALS}f}e{exponent}"


def group_thousands(int_part: str) -> str:
    """Insert ',' every 3 digits from the right, keeping a leading '-'."""
    sign = "-" if int_part.startswith("-") else ""
    digits = int_part.lstrip("-")
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return sign + ",".join(groups)


def format_number(value: float, decimals: int = DISPLAY_DECIMALS) -> str:
    """Format a number for the display or the tape."""
    if math.isnan(value):
        return NOT_A_NUMBER
    if math.isinf(value):
        return INFINITY_GLYPH
    magnitude = abs(value)
    if magnitude > LARGE_THRESHOLD or (magnitude != 0 and magnitude < SMALL_THRESHOLD):
        return to_scientific(value)

    text = f"{_round_half_up(Decimal(value), -decimals):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    int_part, _, dec_part = text.partition(".")
    grouped = group_thousands(int_part)
    return f"{grouped}.{dec_part}" if dec_part else grouped


def count_digits(text: str) -> int:
    """Length of text ignoring sign, decimal point and thousands separators."""
    return len(text.replace("-", "").replace(".", "").replace(",", ""))


def clamp_length(text: str) -> str:
    """Collapse text longer than MAX_LENGTH digit characters to scientific form."""
    if text in (NOT_A_NUMBER, INFINITY_GLYPH):
        return text
    if count_digits(text) <= MAX_LENGTH:
        return text
    try:
        value = float(text.replace(",", ""))
    except ValueError:
        return NOT_A_NUMBER
    return to_scientific(value)
