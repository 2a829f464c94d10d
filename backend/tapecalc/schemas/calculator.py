"""Calculator Schemas - Pydantic models for action requests and render views.

Invariants:
    - ActionRequest.digit required (single 0-9) iff action == digit
    - ActionRequest.operator required iff action == operator
    - Payload fields are rejected on actions that take none
    - CalculatorView mirrors CalculatorState.snapshot() plus the session id
"""

from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from tapecalc.core.domain_types import CalculatorAction, Operator


class ActionRequest(BaseModel):
    """One input action for the state machine."""
    action: CalculatorAction
    digit: str | None = Field(None, pattern=r"^[0-9]$")
    operator: Operator | None = None

    @model_validator(mode="after")
    def validate_payload(self):
        if self.action is CalculatorAction.DIGIT and self.digit is None:
            raise ValueError("digit action requires digit")
        if self.action is CalculatorAction.OPERATOR and self.operator is None:
            raise ValueError("operator action requires operator")
        if self.action is not CalculatorAction.DIGIT and self.digit is not None:
            raise ValueError(f"{self.action.value} action does not take digit")
        if self.action is not CalculatorAction.OPERATOR and self.operator is not None:
            raise ValueError(f"{self.action.value} action does not take operator")
        return self

    @property
    def payload(self) -> str | None:
        if self.action is CalculatorAction.DIGIT:
            return self.digit
        if self.action is CalculatorAction.OPERATOR:
            return self.operator.value
        return None


class KeyPressRequest(BaseModel):
    """Raw keyboard key name (e.g. "7", "Enter", "Backspace")."""
    key: str = Field(min_length=1, max_length=32)


class CalculatorView(BaseModel):
    """Render outputs for one session."""
    session_id: UUID
    display_text: str
    history_text: str
    tape: list[str]
    tape_visible: bool
    memory: str


class KeyPressView(CalculatorView):
    """View after a key press; handled is False for unbound keys."""
    handled: bool


class TapeView(BaseModel):
    """Tape entries, oldest first."""
    session_id: UUID
    entries: list[str]


class SessionList(BaseModel):
    """Live session ids."""
    sessions: list[UUID]
    total: int
