"""Key Bindings - keyboard keys mapped to calculator actions.

Invariants:
    - Digits 0-9 map to digit with the key as payload
    - Unmapped keys resolve to None and are ignored by the dispatcher
"""

from tapecalc.core.domain_types import DIGITS, CalculatorAction, Operator


KEY_BINDINGS: dict[str, tuple[CalculatorAction, str | None]] = {
    "+": (CalculatorAction.OPERATOR, Operator.ADD.value),
    "-": (CalculatorAction.OPERATOR, Operator.SUBTRACT.value),
    "*": (CalculatorAction.OPERATOR, Operator.MULTIPLY.value),
    "/": (CalculatorAction.OPERATOR, Operator.DIVIDE.value),
    "Enter": (CalculatorAction.EQUALS, None),
    "=": (CalculatorAction.EQUALS, None),
    "Backspace": (CalculatorAction.BACKSPACE, None),
    "Escape": (CalculatorAction.CLEAR, None),
    "%": (CalculatorAction.PERCENT, None),
    ".": (CalculatorAction.DOT, None),
    "r": (CalculatorAction.SQRT, None),
    "s": (CalculatorAction.SQUARE, None),
}


def resolve_key(key: str) -> tuple[CalculatorAction, str | None] | None:
    """Map a key name to (action, payload), or None when unbound."""
    if len(key) == 1 and key in DIGITS:
        return CalculatorAction.DIGIT, key
    return KEY_BINDINGS.get(key)
