"""Session Registry - in-memory calculator sessions, one lock per session.

Invariants:
    - Every transition on a CalculatorState runs while holding that session's lock
    - Registry membership (create/delete/list) guarded by the registry lock
    - At most max_sessions live sessions; creating beyond raises SessionLimitError
    - Unknown session ids raise ResourceNotFoundError
    - Views are built inside the session lock (consistent snapshot)

Design Decisions:
    - In-memory dict, not DB: the tape is never persisted across sessions
    - threading.Lock over asyncio.Lock: sync route handlers run in the threadpool
"""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from functools import lru_cache

from tapecalc.config import get_settings
from tapecalc.core.apply_action import apply_action, tape_clear
from tapecalc.core.calculator_state import CalculatorState
from tapecalc.core.domain_types import CalculatorAction, SessionId
from tapecalc.core.errors import (
    ActionValidationError,
    ErrorContext,
    ResourceNotFoundError,
    SessionLimitError,
)
from tapecalc.core.key_bindings import resolve_key

logger = logging.getLogger(__name__)


@dataclass
class CalculatorSession:
    """A calculator state plus the lock that serializes its transitions."""
    id: SessionId
    state: CalculatorState
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def view(self) -> dict:
        return {"session_id": self.id, **self.state.snapshot()}


class SessionRegistry:
    """Owns every live calculator session."""

    def __init__(self, max_sessions: int = 1000, display_decimals: int = 12):
        self._max_sessions = max_sessions
        self._display_decimals = display_decimals
        self._sessions: dict[SessionId, CalculatorSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> CalculatorSession:
        with self._lock:
            if len(self._sessions) >= self._max_sessions:
                raise SessionLimitError(self._max_sessions)
            session_id = SessionId(uuid.uuid4())
            session = CalculatorSession(
                id=session_id,
                state=CalculatorState(display_decimals=self._display_decimals),
            )
            self._sessions[session_id] = session
        logger.info("Calculator session created", extra={"session_id": str(session_id)})
        return session

    def get(self, session_id: SessionId) -> CalculatorSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise ResourceNotFoundError(
                "Session", str(session_id),
                ErrorContext(session_id=str(session_id)),
            )
        return session

    def delete(self, session_id: SessionId) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise ResourceNotFoundError(
                    "Session", str(session_id),
                    ErrorContext(session_id=str(session_id)),
                )
        logger.info("Calculator session deleted", extra={"session_id": str(session_id)})

    def list_ids(self) -> list[SessionId]:
        with self._lock:
            return list(self._sessions)

    def dispatch(
        self,
        session_id: SessionId,
        action: CalculatorAction | str,
        payload: str | None = None,
    ) -> dict:
        """Apply one action and return the resulting view."""
        action_name = getattr(action, "value", action)
        session = self.get(session_id)
        with session.lock:
            try:
                apply_action(session.state, action, payload)
            except ActionValidationError as exc:
                exc.context.session_id = str(session_id)
                exc.context.action = action_name
                raise
            view = session.view()
        logger.debug(
            "Applied %s", action_name,
            extra={
                "session_id": str(session_id),
                "action": action_name,
                "tape_size": len(view["tape"]),
            },
        )
        return view

    def press_key(self, session_id: SessionId, key: str) -> tuple[dict, bool]:
        """Resolve a key press. Unbound keys leave the state untouched."""
        binding = resolve_key(key)
        if binding is None:
            session = self.get(session_id)
            with session.lock:
                return session.view(), False
        action, payload = binding
        return self.dispatch(session_id, action, payload), True

    def view(self, session_id: SessionId) -> dict:
        session = self.get(session_id)
        with session.lock:
            return session.view()

    def tape(self, session_id: SessionId) -> list[str]:
        session = self.get(session_id)
        with session.lock:
            return list(session.state.tape)

    def clear_tape(self, session_id: SessionId) -> None:
        session = self.get(session_id)
        with session.lock:
            tape_clear(session.state)
        logger.info("Tape cleared", extra={"session_id": str(session_id)})


@lru_cache
def get_registry() -> SessionRegistry:
    """Process-wide registry built from settings. Overridable as a FastAPI dependency."""
    settings = get_settings()
    return SessionRegistry(
        max_sessions=settings.max_sessions,
        display_decimals=settings.display_decimals,
    )
