"""Analytics collaborators for the session machine."""

from textecho.analytics import events
from textecho.analytics.tracker import (
    AnalyticsEvent,
    AnalyticsSink,
    LoggingAnalyticsSink,
    NullAnalyticsSink,
)

__all__ = [
    "events",
    "AnalyticsSink",
    "AnalyticsEvent",
    "LoggingAnalyticsSink",
    "NullAnalyticsSink",
]
