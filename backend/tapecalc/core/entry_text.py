"""Entry Text - the only conversions between the entry buffer and numbers.

Invariants:
    - parse_entry() never raises: unparseable text (sentinel, lone "-") is NaN
    - In-progress entries like "3." and "-0." parse to their numeric value
    - to_entry() writes integral values without a fractional part ("3", not "3.0")
    - to_entry() writes plain decimals for 1e-6 <= |v| < 1e21 and exponent
      form outside that range, so the entry stays editable after percent
    - to_entry(NaN) is the sentinel, so a failed value is never stored as "nan"
"""

import math
from decimal import Decimal

from tapecalc.core.domain_types import NOT_A_NUMBER

PLAIN_LOWER_BOUND: float = 1e-6
PLAIN_UPPER_BOUND: float = 1e21


def parse_entry(text: str | None) -> float:
    """Parse an entry buffer (or stored operand) into a float."""
    if text is None:
        return math.nan
    stripped = text.strip()
    if not stripped:
        return 0.0
    if "_" in stripped:
        return math.nan
    try:
        return float(stripped)
    except ValueError:
        return math.nan


def to_entry(value: float) -> str:
    """Render a number as entry buffer text."""
    if math.isnan(value):
        return NOT_A_NUMBER
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < PLAIN_UPPER_BOUND:
        return str(int(value))
    text = repr(value)
    if PLAIN_LOWER_BOUND <= abs(value) < PLAIN_UPPER_BOUND:
        return format(Decimal(text), "f")
    if "e" in text:
        mantissa, exponent = text.split("e")
        return f"{mantissa}e{int(exponent)}"
    return text
