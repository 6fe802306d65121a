"""FSM state definitions for a text validation session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from textecho.models import ValidationError


class SessionStatus(Enum):
    """States for the session FSM."""

    # Initial state, also reached by clear/reset
    IDLE = auto()

    # A validation attempt is in flight
    LOADING = auto()

    # Terminal until the next user action
    SUCCESS = auto()
    ERROR = auto()

    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return self in (SessionStatus.SUCCESS, SessionStatus.ERROR)


# Valid state transitions
TRANSITIONS: dict[SessionStatus, set[SessionStatus]] = {
    SessionStatus.IDLE: {SessionStatus.IDLE, SessionStatus.LOADING},
    SessionStatus.LOADING: {
        SessionStatus.LOADING,  # Superseded by a newer submit
        SessionStatus.SUCCESS,
        SessionStatus.ERROR,
        SessionStatus.IDLE,  # Cleared
    },
    SessionStatus.SUCCESS: {
        SessionStatus.SUCCESS,
        SessionStatus.LOADING,
        SessionStatus.IDLE,
    },
    SessionStatus.ERROR: {SessionStatus.LOADING, SessionStatus.IDLE},
}


class TransitionError(Exception):
    """Invalid state transition."""

    def __init__(self, from_state: SessionStatus, to_state: SessionStatus) -> None:
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Invalid transition: {from_state.name} -> {to_state.name}"
        )


@dataclass(frozen=True)
class SessionState:
    """Snapshot of everything the UI observes."""

    input_text: str = ""
    output_text: str = ""
    is_loading: bool = False
    error: Optional[ValidationError] = None
    status: SessionStatus = SessionStatus.IDLE

    def can_transition_to(self, new_status: SessionStatus) -> bool:
        """Check if transition to new_status is valid."""
        return new_status in TRANSITIONS.get(self.status, set())

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status.name,
            "input_text": self.input_text,
            "output_text": self.output_text,
            "is_loading": self.is_loading,
            "error": self.error.to_dict() if self.error else None,
        }


class SessionEvent(Enum):
    """Events that drive the session FSM."""

    TEXT_CHANGED = auto()
    SUBMIT = auto()
    CLEAR = auto()
    RESET = auto()
    RESULT_RECEIVED = auto()
