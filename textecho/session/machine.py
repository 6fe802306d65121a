"""FSM machine for a single text validation session."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import AsyncIterator, Callable, Optional

from textecho.analytics import events
from textecho.analytics.tracker import AnalyticsSink, NullAnalyticsSink
from textecho.config.settings import SessionConfig
from textecho.models import Success, Unknown, ValidationOutcome
from textecho.session.states import (
    SessionEvent,
    SessionState,
    SessionStatus,
    TransitionError,
)
from textecho.utils.logging import get_logger, new_session_id, set_attempt, set_session_id
from textecho.validator.mapper import describe_failure
from textecho.validator.orchestrator import ValidationOrchestrator

logger = get_logger("session.machine")

StateListener = Callable[[SessionState], None]


class SessionMachine:
    """
    Finite State Machine owning the observable SessionState.

    Commands (on_text_changed, on_submit, on_clear, on_reset) are the only
    mutation path. At most one validation attempt is current: a new submit
    or a clear cancels the in-flight task, and every result is checked
    against the attempt sequence number before it is applied.

    Must be driven from a running asyncio event loop.
    """

    def __init__(
        self,
        orchestrator: ValidationOrchestrator,
        analytics: Optional[AnalyticsSink] = None,
        config: Optional[SessionConfig] = None,
        session_id: Optional[str] = None,
    ) -> None:
        """
        Initialize the session machine.

        Args:
            orchestrator: Validation entry point
            analytics: Fire-and-forget event sink
            config: Session policy
            session_id: Identifier bound into log events
        """
        self.orchestrator = orchestrator
        self.analytics = analytics or NullAnalyticsSink()
        self.config = config or SessionConfig()
        self.session_id = session_id or new_session_id()

        self._state = SessionState()
        self._listeners: list[StateListener] = []

        # Sequence number of the current attempt; 0 means none started
        self._attempt = 0
        self._inflight: Optional[asyncio.Task] = None

    @property
    def state(self) -> SessionState:
        """Current state snapshot."""
        return self._state

    @property
    def attempt(self) -> int:
        """Sequence number of the most recent attempt."""
        return self._attempt

    @property
    def in_flight(self) -> bool:
        """Whether a validation task is still running."""
        return self._inflight is not None and not self._inflight.done()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener called with every new state.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def stream(self) -> AsyncIterator[SessionState]:
        """Yield the current state, then every subsequent state."""
        queue: asyncio.Queue[SessionState] = asyncio.Queue()
        unsubscribe = self.subscribe(queue.put_nowait)
        try:
            yield self._state
            while True:
                yield await queue.get()
        finally:
            unsubscribe()

    def _apply(self, event: SessionEvent, new_state: SessionState) -> None:
        """Validate the status change, swap the snapshot and notify."""
        old_state = self._state
        if not old_state.can_transition_to(new_state.status):
            raise TransitionError(old_state.status, new_state.status)

        self._state = new_state

        if old_state.status != new_state.status:
            logger.debug(
                "state_transition",
                session_id=self.session_id,
                trigger=event.name,
                from_state=old_state.status.name,
                to_state=new_state.status.name,
            )

        for listener in list(self._listeners):
            listener(new_state)

    def _cancel_inflight(self, reason: str) -> None:
        """Cancel the current task, if any. Safe to call repeatedly."""
        task = self._inflight
        self._inflight = None
        if task is None or task.done():
            return

        task.cancel()
        logger.info(
            "attempt_cancelled",
            session_id=self.session_id,
            attempt=self._attempt,
            reason=reason,
        )
        self.analytics.emit(
            events.VALIDATION_CANCELLED,
            {events.PROP_REASON: reason},
        )

    def on_text_changed(self, text: str) -> None:
        """
        Update the input text. Never starts a validation.

        Emptying the field is reported as input_cleared instead of
        text_input_changed.
        """
        state = self._state
        status = state.status
        output_text = state.output_text

        if status == SessionStatus.ERROR:
            status = SessionStatus.IDLE
        elif status == SessionStatus.SUCCESS and self.config.clear_output_on_edit:
            status = SessionStatus.IDLE
            output_text = ""

        self._apply(
            SessionEvent.TEXT_CHANGED,
            replace(state, input_text=text, output_text=output_text, error=None, status=status),
        )
        if not text:
            self.analytics.emit(events.INPUT_CLEARED, {})
            return
        self.analytics.emit(
            events.TEXT_INPUT_CHANGED,
            {events.PROP_TEXT_LENGTH: len(text)},
        )

    def on_submit(self) -> asyncio.Task:
        """
        Start validating the current input text.

        Any attempt still in flight is cancelled first.

        Returns:
            The task running the new attempt
        """
        loop = asyncio.get_running_loop()
        text = self._state.input_text

        self._cancel_inflight(events.REASON_SUPERSEDED)
        self._attempt += 1
        attempt = self._attempt

        self.analytics.emit(
            events.SUBMIT_CLICKED,
            {events.PROP_TEXT_LENGTH: len(text)},
        )

        self._apply(
            SessionEvent.SUBMIT,
            replace(self._state, is_loading=True, error=None, status=SessionStatus.LOADING),
        )

        task = loop.create_task(self._run_attempt(attempt, text, loop.time()))
        self._inflight = task
        return task

    async def _run_attempt(self, attempt: int, text: str, started_at: float) -> None:
        """Run one validation and apply its outcome if still current."""
        set_session_id(self.session_id)
        set_attempt(attempt)

        try:
            outcome = await self.orchestrator.validate(text)
        except Exception as e:
            # Any escaped failure still ends the attempt in ERROR
            detail = describe_failure(e)
            logger.warning(
                "orchestrator_failed",
                session_id=self.session_id,
                attempt=attempt,
                detail=detail,
            )
            outcome = Unknown(detail=detail)

        if attempt != self._attempt:
            logger.info(
                "stale_result_discarded",
                session_id=self.session_id,
                attempt=attempt,
                current_attempt=self._attempt,
            )
            return

        self._inflight = None
        elapsed_ms = int((asyncio.get_running_loop().time() - started_at) * 1000)
        self._on_result(outcome, text, elapsed_ms)

    def _on_result(self, outcome: ValidationOutcome, text: str, elapsed_ms: int) -> None:
        """Apply a terminal outcome for the current attempt."""
        if isinstance(outcome, Success):
            self._apply(
                SessionEvent.RESULT_RECEIVED,
                replace(
                    self._state,
                    output_text=outcome.validated_text,
                    is_loading=False,
                    error=None,
                    status=SessionStatus.SUCCESS,
                ),
            )
            logger.info(
                "validation_succeeded",
                session_id=self.session_id,
                duration_ms=elapsed_ms,
            )
            self.analytics.emit(
                events.VALIDATION_SUCCESS,
                {
                    events.PROP_TEXT_LENGTH: len(text),
                    events.PROP_VALIDATION_TIME: elapsed_ms,
                    events.PROP_OUTPUT_LENGTH: len(outcome.validated_text),
                },
            )
            return

        self._apply(
            SessionEvent.RESULT_RECEIVED,
            replace(
                self._state,
                is_loading=False,
                error=outcome,
                status=SessionStatus.ERROR,
            ),
        )
        logger.info(
            "validation_failed",
            session_id=self.session_id,
            kind=outcome.kind.value,
            duration_ms=elapsed_ms,
        )
        self.analytics.emit(
            events.VALIDATION_ERROR,
            {
                events.PROP_ERROR_TYPE: events.ERROR_TYPES[outcome.kind],
                events.PROP_TEXT_LENGTH: len(text),
                events.PROP_VALIDATION_TIME: elapsed_ms,
            },
        )

    def on_clear(self) -> None:
        """Cancel any attempt and return everything to defaults."""
        text_length = len(self._state.input_text)

        self._cancel_inflight(events.REASON_CLEARED)
        # Results from any attempt started before the clear are stale
        self._attempt += 1

        self._apply(SessionEvent.CLEAR, SessionState())
        self.analytics.emit(
            events.CLEAR_CLICKED,
            {events.PROP_TEXT_LENGTH: text_length},
        )

    def on_reset(self) -> None:
        """Return a terminal SUCCESS/ERROR display to IDLE, keeping the text."""
        if not self._state.status.is_terminal():
            logger.debug(
                "reset_ignored",
                session_id=self.session_id,
                status=self._state.status.name,
            )
            return

        self._apply(
            SessionEvent.RESET,
            replace(self._state, error=None, status=SessionStatus.IDLE),
        )
        self.analytics.emit(events.STATE_RESET, {})

    async def wait(self) -> None:
        """Wait for the in-flight attempt, if any, to finish or be cancelled."""
        task = self._inflight
        if task is None:
            return
        await asyncio.wait([task])

    async def aclose(self) -> None:
        """Cancel any in-flight attempt and wait for it to unwind."""
        task = self._inflight
        self._cancel_inflight(events.REASON_CLOSED)
        self._attempt += 1
        if task is not None:
            await asyncio.wait([task])
        self._listeners.clear()
