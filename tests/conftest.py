"""Pytest configuration and fixtures."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import pytest

from textecho.config.settings import RemoteConfig
from textecho.models import Success, ValidationOutcome
from textecho.session.machine import SessionMachine
from textecho.utils.logging import configure_logging
from textecho.validator.mapper import ResultMapper
from textecho.validator.orchestrator import ValidationOrchestrator
from textecho.validator.remote import RemoteValidator
from textecho.validator.rules import RuleEngine


class RecordingSink:
    """Analytics sink that keeps every event in memory."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event_name: str, properties: dict[str, Any]) -> None:
        self.events.append((event_name, dict(properties)))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def last(self, event_name: str) -> dict[str, Any]:
        for name, properties in reversed(self.events):
            if name == event_name:
                return properties
        raise AssertionError(f"No {event_name} event recorded")


class GatedRemote:
    """Remote validator stand-in that holds each call until released."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.cancelled: list[str] = []
        self.failures: dict[str, BaseException] = {}
        self._gates: dict[str, asyncio.Event] = {}

    def _gate(self, text: str) -> asyncio.Event:
        return self._gates.setdefault(text, asyncio.Event())

    def release(self, text: str) -> None:
        self._gate(text).set()

    def fail(self, text: str, failure: BaseException) -> None:
        self.failures[text] = failure

    async def validate(self, text: str) -> str:
        self.calls.append(text)
        try:
            await self._gate(text).wait()
        except asyncio.CancelledError:
            self.cancelled.append(text)
            raise
        if text in self.failures:
            raise self.failures[text]
        return text


class StubbornOrchestrator:
    """Orchestrator that ignores cancellation and always finishes."""

    def __init__(self) -> None:
        self._gates: dict[str, asyncio.Event] = {}

    def _gate(self, text: str) -> asyncio.Event:
        return self._gates.setdefault(text, asyncio.Event())

    def release(self, text: str) -> None:
        self._gate(text).set()

    async def validate(self, raw: str) -> ValidationOutcome:
        gate = self._gate(raw)
        while not gate.is_set():
            try:
                await gate.wait()
            except asyncio.CancelledError:
                continue
        return Success(validated_text=raw.strip())


class FixedOrchestrator:
    """Orchestrator returning a preset outcome."""

    def __init__(self, outcome: ValidationOutcome) -> None:
        self.outcome = outcome

    async def validate(self, raw: str) -> ValidationOutcome:
        await asyncio.sleep(0)
        return self.outcome


class FailingOrchestrator:
    """Orchestrator that raises instead of returning an outcome."""

    def __init__(self, failure: Exception) -> None:
        self.failure = failure

    async def validate(self, raw: str) -> ValidationOutcome:
        await asyncio.sleep(0)
        raise self.failure


def instant_remote_config(
    rejection_probability: float = 0.0,
    transport_failure_probability: float = 0.0,
    rejection_message: str = "Invalid input detected",
) -> RemoteConfig:
    """Remote settings with no latency."""
    return RemoteConfig(
        min_delay_ms=0,
        max_delay_ms=0,
        rejection_probability=rejection_probability,
        rejection_message=rejection_message,
        transport_failure_probability=transport_failure_probability,
        seed=1234,
    )


def make_orchestrator(remote: Any, min_length: int = 3) -> ValidationOrchestrator:
    """Wire an orchestrator around any remote validator."""
    return ValidationOrchestrator(
        rules=RuleEngine(min_length=min_length),
        remote=remote,
        mapper=ResultMapper(),
    )


@pytest.fixture
def sink() -> RecordingSink:
    """Provide a recording analytics sink."""
    return RecordingSink()


@pytest.fixture
def gated_remote() -> GatedRemote:
    """Provide a remote validator that waits to be released."""
    return GatedRemote()


@pytest.fixture
def accepting_remote() -> RemoteValidator:
    """Provide a remote validator that always accepts immediately."""
    return RemoteValidator(instant_remote_config())


@pytest.fixture
def rejecting_remote() -> RemoteValidator:
    """Provide a remote validator that always rejects immediately."""
    return RemoteValidator(instant_remote_config(rejection_probability=1.0))


@pytest.fixture
def gated_machine(gated_remote: GatedRemote, sink: RecordingSink) -> SessionMachine:
    """Provide a session machine over a gated remote."""
    return SessionMachine(make_orchestrator(gated_remote), analytics=sink)


def record_states(machine: SessionMachine, states: Optional[list] = None) -> list:
    """Collect every state the machine publishes."""
    states = states if states is not None else []
    machine.subscribe(states.append)
    return states


@pytest.fixture(autouse=True)
def default_logging():
    """Restore default logging after tests that reconfigure it."""
    yield
    configure_logging()
