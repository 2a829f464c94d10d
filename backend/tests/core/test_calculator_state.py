"""Calculator State - tests for defaults, derived values and render outputs.

Tests cover:
    - Default state
    - display_text formatting, clamping and the sentinel
    - history_text only while a chain is pending
    - clear_entry_fields preserves memory and tape
    - snapshot shape
"""

from tapecalc.core.calculator_state import CalculatorState
from tapecalc.core.domain_types import NOT_A_NUMBER, Operator


def test_defaults():
    state = CalculatorState()
    assert state.current == "0"
    assert state.previous is None
    assert state.operator is None
    assert state.overwrite is False
    assert state.memory == 0
    assert state.tape == []
    assert state.tape_visible is False


def test_states_do_not_share_tape():
    a = CalculatorState()
    b = CalculatorState()
    a.add_to_tape("1 + 1 = 2")
    assert b.tape == []


def test_display_groups_thousands():
    state = CalculatorState(current="1234567")
    assert state.display_text == "1,234,567"


def test_display_of_in_progress_decimal():
    state = CalculatorState(current="3.")
    assert state.display_text == "3"


def test_display_of_sentinel():
    state = CalculatorState(current=NOT_A_NUMBER)
    assert state.display_text == NOT_A_NUMBER


def test_display_of_negated_sentinel():
    state = CalculatorState(current="-" + NOT_A_NUMBER)
    assert state.display_text == NOT_A_NUMBER


def test_display_of_large_value_is_scientific():
    state = CalculatorState(current="123456789012345")
    assert state.display_text == "1.234568e14"


def test_display_of_infinity():
    state = CalculatorState(current="Infinity")
    assert state.display_text == "∞"


def test_display_uses_configured_decimals():
    state = CalculatorState(current="0.123456789", display_decimals=4)
    assert state.display_text == "0.1235"


def test_history_empty_without_pending_operation():
    state = CalculatorState(current="5")
    assert state.history_text == ""


def test_history_shows_previous_and_operator():
    state = CalculatorState(previous="1234", operator=Operator.MULTIPLY)
    assert state.history_text == "1,234 *"


def test_history_empty_when_previous_missing():
    state = CalculatorState(operator=Operator.ADD)
    assert state.history_text == ""


def test_clear_entry_fields_keeps_memory_and_tape():
    state = CalculatorState(
        current="9", previous="3", operator=Operator.ADD, overwrite=True,
        memory=7.0, tape=["1 + 2 = 3"],
    )
    state.clear_entry_fields()
    assert state.current == "0"
    assert state.previous is None
    assert state.operator is None
    assert state.overwrite is False
    assert state.memory == 7.0
    assert state.tape == ["1 + 2 = 3"]


def test_snapshot_shape():
    state = CalculatorState(
        current="42", previous="6", operator=Operator.ADD, memory=1500.0,
        tape=["a"],
    )
    snap = state.snapshot()
    assert snap == {
        "display_text": "42",
        "history_text": "6 +",
        "tape": ["a"],
        "tape_visible": False,
        "memory": "1,500",
    }


def test_snapshot_tape_is_a_copy():
    state = CalculatorState()
    snap = state.snapshot()
    snap["tape"].append("x")
    assert state.tape == []
