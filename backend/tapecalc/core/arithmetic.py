"""Arithmetic Engine - one binary operation per call at a fixed working precision.

Invariants:
    - normalize() is the only place precision is applied (PRECISION = 15 significant digits)
    - Operands are normalized before and the result after every operation
    - Ties round half away from zero on the exact binary value
    - Division by zero yields NaN; this is the only engine-level failure
    - No chaining or precedence here: exactly one operation per call
"""

import math
import operator as _op
from decimal import ROUND_HALF_UP, Decimal

from tapecalc.core.domain_types import Operator, PRECISION
from tapecalc.core.errors import ActionValidationError


_OPERATIONS = {
    Operator.ADD: _op.add,
    Operator.SUBTRACT: _op.sub,
    Operator.MULTIPLY: _op.mul,
    Operator.DIVIDE: _op.truediv,
}


def normalize(value: float) -> float:
    """Round to PRECISION significant digits. NaN and infinities pass through."""
    if not math.isfinite(value) or value == 0:
        return float(value)
    exact = Decimal(value)
    step = Decimal(1).scaleb(exact.adjusted() - PRECISION + 1)
    return float(exact.quantize(step, rounding=ROUND_HALF_UP))


def apply_operator(operator: Operator | str, a: float, b: float) -> float:
    """Apply one binary operator. Returns NaN when the operation is undefined."""
    try:
        op = Operator(operator)
    except ValueError:
        raise ActionValidationError(
            f"Unknown operator '{operator}'", field="operator",
        ) from None
    x = normalize(a)
    y = normalize(b)
    if op is Operator.DIVIDE and y == 0:
        return math.nan
    return normalize(_OPERATIONS[op](x, y))
