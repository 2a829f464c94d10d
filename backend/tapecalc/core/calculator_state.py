"""Calculator State - per-session entry buffer, pending operation, memory and tape.

Invariants:
    - current is never empty; it parses to a number or is the sentinel
    - operator set implies previous set, except after a failed chained resolution
    - tape is append-only between explicit tape clears, newest last
    - memory and tape survive clear / clear-entry
    - All numeric reads of the buffer go through value (parse_entry)

Design Decisions:
    - Pure dataclass: transitions live in apply_action, rendering here, no IO
    - current stays textual so in-progress entries ("3.", "-0.") survive
"""

import math
from dataclasses import dataclass, field

from tapecalc.core.domain_types import DISPLAY_DECIMALS, NOT_A_NUMBER, Operator
from tapecalc.core.entry_text import parse_entry
from tapecalc.core.format_number import clamp_length, format_number


@dataclass
class CalculatorState:
    """Per-session calculator state - pure dataclass, no IO."""

    # === Entry ===
    current: str = "0"
    overwrite: bool = False

    # === Pending binary operation ===
    previous: str | None = None
    operator: Operator | None = None

    # === Memory register (survives clears) ===
    memory: float = 0.0

    # === Tape ===
    tape: list[str] = field(default_factory=list)
    tape_visible: bool = False

    # === Display policy ===
    display_decimals: int = DISPLAY_DECIMALS

    @property
    def value(self) -> float:
        """Numeric value of the entry buffer (NaN for the sentinel)."""
        return parse_entry(self.current)

    @property
    def previous_value(self) -> float:
        return parse_entry(self.previous)

    @property
    def has_pending_operation(self) -> bool:
        return self.operator is not None and self.previous is not None

    def format(self, value: float) -> str:
        return format_number(value, self.display_decimals)

    @property
    def display_text(self) -> str:
        value = self.value
        if math.isnan(value):
            return NOT_A_NUMBER
        return clamp_length(self.format(value))

    @property
    def history_text(self) -> str:
        if not self.has_pending_operation:
            return ""
        return f"{self.format(self.previous_value)} {self.operator.value}"

    def add_to_tape(self, entry: str) -> None:
        self.tape.append(entry)

    def clear_entry_fields(self) -> None:
        """Reset entry and pending operation. Memory and tape untouched."""
        self.current = "0"
        self.previous = None
        self.operator = None
        self.overwrite = False

    def snapshot(self) -> dict:
        """Render outputs for the display surface."""
        return {
            "display_text": self.display_text,
            "history_text": self.history_text,
            "tape": list(self.tape),
            "tape_visible": self.tape_visible,
            "memory": self.format(self.memory),
        }
