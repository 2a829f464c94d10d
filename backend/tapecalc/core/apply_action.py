"""Calculator Transitions - the state machine reducing input actions to state changes.

Invariants:
    - Each transition runs to completion and mutates only the given CalculatorState
    - Every stored arithmetic result passes through normalize() (via apply_operator
      or directly for unary/memory operations)
    - Failed results store the sentinel in current and are never taped
    - overwrite is set after operator, equals, sqrt, square and memory recall;
      cleared by the first digit or dot
    - Digit input never grows the entry beyond MAX_LENGTH digit characters
    - apply_action validates payloads; malformed actions raise ActionValidationError

Design Decisions:
    - Explicit dict from action to transition: every mapping visible in one place
    - First operator stores current as previous; a later operator resolves the
      pending one only when a second operand has been typed (not in overwrite)
"""

import math

from tapecalc.core.arithmetic import apply_operator, normalize
from tapecalc.core.calculator_state import CalculatorState
from tapecalc.core.domain_types import (
    DIGITS,
    MAX_LENGTH,
    NOT_A_NUMBER,
    CalculatorAction,
    Operator,
)
from tapecalc.core.entry_text import to_entry
from tapecalc.core.errors import ActionValidationError


# ─── Entry ───────────────────────────────────────────────────────

def input_digit(state: CalculatorState, digit: str) -> None:
    if state.overwrite:
        state.current = digit
        state.overwrite = False
    elif state.current == "0":
        state.current = digit
    elif len(state.current.replace("-", "", 1).replace(".", "", 1)) < MAX_LENGTH:
        state.current += digit


def input_dot(state: CalculatorState) -> None:
    if state.overwrite:
        state.current = "0."
        state.overwrite = False
        return
    if "." not in state.current:
        state.current += "."


def clear_all(state: CalculatorState) -> None:
    state.clear_entry_fields()


def clear_entry(state: CalculatorState) -> None:
    state.current = "0"
    state.overwrite = False


def toggle_sign(state: CalculatorState) -> None:
    if state.current == "0":
        return
    if state.current.startswith("-"):
        state.current = state.current[1:]
    else:
        state.current = "-" + state.current


def backspace(state: CalculatorState) -> None:
    """Drop the last typed character. Ignored on a computed result (overwrite)."""
    if state.overwrite:
        return
    current = state.current
    if len(current) <= 1 or (len(current) == 2 and current.startswith("-")):
        state.current = "0"
        return
    state.current = current[:-1]


# ─── Binary operations ───────────────────────────────────────────

def _resolve(state: CalculatorState) -> float:
    """Apply the pending operator to (previous, current), taping on success."""
    a = state.previous_value
    b = state.value
    result = apply_operator(state.operator, a, b)
    if not math.isnan(result):
        state.add_to_tape(
            f"{state.format(a)} {state.operator.value} {state.format(b)} = "
            f"{state.format(result)}"
        )
    return result


def set_operator(state: CalculatorState, op: Operator) -> None:
    if state.has_pending_operation and not state.overwrite:
        result = _resolve(state)
        if math.isnan(result):
            state.previous = None
            state.current = NOT_A_NUMBER
        else:
            state.previous = to_entry(result)
            state.current = to_entry(result)
    else:
        state.previous = state.current
    state.operator = op
    state.overwrite = True


def equals(state: CalculatorState) -> None:
    if not state.has_pending_operation:
        return
    result = _resolve(state)
    state.current = to_entry(result)
    state.previous = None
    state.operator = None
    state.overwrite = True


# ─── Unary functions ─────────────────────────────────────────────

def percent(state: CalculatorState) -> None:
    state.current = to_entry(normalize(state.value / 100))


def square_root(state: CalculatorState) -> None:
    value = state.value
    state.overwrite = True
    if math.isnan(value) or value < 0:
        state.current = NOT_A_NUMBER
        return
    result = normalize(math.sqrt(value))
    state.add_to_tape(f"√({state.format(value)}) = {state.format(result)}")
    state.current = to_entry(result)


def square(state: CalculatorState) -> None:
    value = state.value
    state.overwrite = True
    result = normalize(value * value)
    if math.isnan(result):
        state.current = NOT_A_NUMBER
        return
    state.add_to_tape(f"({state.format(value)})² = {state.format(result)}")
    state.current = to_entry(result)


# ─── Memory ──────────────────────────────────────────────────────

def memory_clear(state: CalculatorState) -> None:
    state.memory = 0.0


def memory_recall(state: CalculatorState) -> None:
    state.current = to_entry(state.memory)
    state.overwrite = True


def memory_add(state: CalculatorState) -> None:
    state.memory = normalize(state.memory + state.value)


def memory_subtract(state: CalculatorState) -> None:
    state.memory = normalize(state.memory - state.value)


# ─── Tape ────────────────────────────────────────────────────────

def tape_clear(state: CalculatorState) -> None:
    state.tape.clear()


def toggle_tape_visible(state: CalculatorState) -> None:
    state.tape_visible = not state.tape_visible


# ─── Dispatch ────────────────────────────────────────────────────

_SIMPLE_TRANSITIONS = {
    CalculatorAction.DOT: input_dot,
    CalculatorAction.CLEAR_ENTRY: clear_entry,
    CalculatorAction.EQUALS: equals,
    CalculatorAction.CLEAR: clear_all,
    CalculatorAction.SIGN: toggle_sign,
    CalculatorAction.PERCENT: percent,
    CalculatorAction.BACKSPACE: backspace,
    CalculatorAction.SQRT: square_root,
    CalculatorAction.SQUARE: square,
    CalculatorAction.MEMORY_CLEAR: memory_clear,
    CalculatorAction.MEMORY_RECALL: memory_recall,
    CalculatorAction.MEMORY_ADD: memory_add,
    CalculatorAction.MEMORY_SUBTRACT: memory_subtract,
    CalculatorAction.TAPE_CLEAR: tape_clear,
    CalculatorAction.TOGGLE_HISTORY: toggle_tape_visible,
}


def _parse_action(action: CalculatorAction | str) -> CalculatorAction:
    try:
        return CalculatorAction(action)
    except ValueError:
        raise ActionValidationError(
            f"Unknown action '{action}'", field="action",
        ) from None


def _parse_digit(payload: str | None) -> str:
    if not isinstance(payload, str) or len(payload) != 1 or payload not in DIGITS:
        raise ActionValidationError(
            f"digit action requires a single character 0-9, got {payload!r}",
            field="digit",
        )
    return payload


def _parse_operator(payload: Operator | str | None) -> Operator:
    try:
        return Operator(payload)
    except ValueError:
        raise ActionValidationError(
            f"operator action requires one of + - * /, got {payload!r}",
            field="operator",
        ) from None


def apply_action(
    state: CalculatorState,
    action: CalculatorAction | str,
    payload: str | None = None,
) -> CalculatorState:
    """Apply one input action to state in place and return it."""
    parsed = _parse_action(action)
    if parsed is CalculatorAction.DIGIT:
        input_digit(state, _parse_digit(payload))
    elif parsed is CalculatorAction.OPERATOR:
        set_operator(state, _parse_operator(payload))
    else:
        _SIMPLE_TRANSITIONS[parsed](state)
    return state
