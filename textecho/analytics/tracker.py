"""Analytics sinks.

A sink receives fire-and-forget events from the session machine. Sinks
must never raise into or block the caller; failures are logged and dropped
here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Protocol

from textecho.utils.logging import get_logger

logger = get_logger("analytics.tracker")


class AnalyticsSink(Protocol):
    """Anything that accepts analytics events."""

    def emit(self, event_name: str, properties: dict[str, Any]) -> None:
        ...


@dataclass
class AnalyticsEvent:
    """A recorded analytics event."""

    name: str
    properties: dict[str, Any] = field(default_factory=dict)
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "properties": self.properties,
            "recorded_at": self.recorded_at.isoformat(),
        }


class NullAnalyticsSink:
    """Discards every event."""

    def emit(self, event_name: str, properties: dict[str, Any]) -> None:
        pass


class LoggingAnalyticsSink:
    """
    Buffers events and writes them to the structured log.

    When the buffer reaches its capacity it is flushed as a single
    summary log line and emptied.
    """

    def __init__(self, buffer_size: int = 100) -> None:
        """
        Initialize the sink.

        Args:
            buffer_size: Events held before an automatic flush
        """
        self.buffer_size = buffer_size
        self._buffer: list[AnalyticsEvent] = []
        self.total_events = 0
        self.dropped_events = 0

    @property
    def pending(self) -> list[AnalyticsEvent]:
        """Events not yet flushed."""
        return list(self._buffer)

    def emit(self, event_name: str, properties: Optional[dict[str, Any]] = None) -> None:
        """Record an event. Never raises."""
        try:
            event = AnalyticsEvent(name=event_name, properties=dict(properties or {}))
            self._buffer.append(event)
            self.total_events += 1

            logger.debug("analytics_event", event_name=event_name, properties=event.properties)

            if len(self._buffer) >= self.buffer_size:
                self.flush()
        except Exception as e:
            self.dropped_events += 1
            logger.warning("analytics_emit_failed", event_name=event_name, error=str(e))

    def flush(self) -> int:
        """
        Write buffered events to the log and clear the buffer.

        Returns:
            Number of events flushed
        """
        count = len(self._buffer)
        if count:
            logger.info(
                "analytics_flushed",
                count=count,
                events=[event.name for event in self._buffer],
            )
        self._buffer.clear()
        return count
