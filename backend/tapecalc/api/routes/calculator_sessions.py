"""Calculator Sessions - lifecycle, actions, key presses and tape for one session.

Invariants:
    - Input validated by Pydantic before reaching the route handler
    - Every mutation goes through SessionRegistry (locked per session)
    - Unknown session ids surface as 404 via the TapecalcError handler
    - Arithmetic failures are 200 responses with display_text "Not a number"
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from tapecalc.schemas.calculator import (
    ActionRequest,
    CalculatorView,
    KeyPressRequest,
    KeyPressView,
    SessionList,
    TapeView,
)
from tapecalc.services.session_registry import SessionRegistry, get_registry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.post(
    "", response_model=CalculatorView,
    status_code=status.HTTP_201_CREATED,
)
def create_session(registry: SessionRegistry = Depends(get_registry)):
    """Create a fresh calculator session."""
    session = registry.create()
    return session.view()


@router.get("", response_model=SessionList)
def list_sessions(registry: SessionRegistry = Depends(get_registry)):
    """List live session ids."""
    ids = registry.list_ids()
    return {"sessions": ids, "total": len(ids)}


@router.get("/{session_id}", response_model=CalculatorView)
def get_session(
    session_id: UUID, registry: SessionRegistry = Depends(get_registry),
):
    """Current render outputs for a session."""
    return registry.view(session_id)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(
    session_id: UUID, registry: SessionRegistry = Depends(get_registry),
):
    """Discard a session together with its memory and tape."""
    registry.delete(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/actions", response_model=CalculatorView)
def apply_session_action(
    session_id: UUID,
    body: ActionRequest,
    registry: SessionRegistry = Depends(get_registry),
):
    """Apply one named action and return the new view."""
    return registry.dispatch(session_id, body.action, body.payload)


@router.post("/{session_id}/keys", response_model=KeyPressView)
def press_key(
    session_id: UUID,
    body: KeyPressRequest,
    registry: SessionRegistry = Depends(get_registry),
):
    """Apply the action bound to a keyboard key. Unbound keys are ignored."""
    view, handled = registry.press_key(session_id, body.key)
    return {**view, "handled": handled}


@router.get("/{session_id}/tape", response_model=TapeView)
def get_tape(
    session_id: UUID, registry: SessionRegistry = Depends(get_registry),
):
    """Tape entries, oldest first."""
    return {"session_id": session_id, "entries": registry.tape(session_id)}


@router.delete("/{session_id}/tape", status_code=status.HTTP_204_NO_CONTENT)
def clear_tape(
    session_id: UUID, registry: SessionRegistry = Depends(get_registry),
):
    """Empty the tape. Entry, pending operation and memory are untouched."""
    registry.clear_tape(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
