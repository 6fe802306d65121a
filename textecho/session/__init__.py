"""FSM-based validation session.

A session owns the state the UI observes and moves it through
well-defined states:

    IDLE -> LOADING -> SUCCESS | ERROR
              ^  |
              +--+  (a newer submit supersedes the in-flight attempt)

Clear returns to IDLE from anywhere; reset returns SUCCESS/ERROR to IDLE
without touching the text.
"""

from textecho.session.machine import SessionMachine, StateListener
from textecho.session.states import (
    TRANSITIONS,
    SessionEvent,
    SessionState,
    SessionStatus,
    TransitionError,
)

__all__ = [
    # States
    "SessionStatus",
    "SessionState",
    "SessionEvent",
    "TransitionError",
    "TRANSITIONS",
    # Machine
    "SessionMachine",
    "StateListener",
]
