"""Domain Types - enums and constants shared by the calculator core.

Invariants:
    - All valid actions and operators encoded as Enums, no raw string matching
    - Enum values are the wire names used by the HTTP dispatcher
    - MAX_LENGTH (14) and PRECISION (15) are the single source of truth for limits

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

SessionId = NewType("SessionId", UUID)


# ─── Limits ──────────────────────────────────────────────────────

MAX_LENGTH: int = 14            # digit characters in the entry buffer
PRECISION: int = 15             # significant digits kept after arithmetic
DISPLAY_DECIMALS: int = 12      # fixed-point fraction digits on display
SCIENTIFIC_DECIMALS: int = 6    # mantissa fraction digits in scientific form
LARGE_THRESHOLD: float = 999_999_999_999
SMALL_THRESHOLD: float = 1e-10

NOT_A_NUMBER: str = "Not a number"
INFINITY_GLYPH: str = "∞"


# ─── Enums ───────────────────────────────────────────────────────

class Operator(str, Enum):
    """Pending binary operator."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class CalculatorAction(str, Enum):
    """Named input actions accepted by the state machine."""
    DIGIT = "digit"
    DOT = "dot"
    CLEAR_ENTRY = "ce"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"
    SIGN = "sign"
    PERCENT = "percent"
    BACKSPACE = "backspace"
    SQRT = "sqrt"
    SQUARE = "square"
    MEMORY_CLEAR = "mc"
    MEMORY_RECALL = "mr"
    MEMORY_ADD = "mplus"
    MEMORY_SUBTRACT = "mminus"
    TAPE_CLEAR = "tapeClear"
    TOGGLE_HISTORY = "toggleHistoryVisible"


DIGITS = frozenset("0123456789")
