"""Configuration module for textecho."""

from textecho.config.settings import (
    AnalyticsConfig,
    LoggingConfig,
    RemoteConfig,
    RulesConfig,
    SessionConfig,
    TextEchoConfig,
    load_config,
)

__all__ = [
    "TextEchoConfig",
    "RulesConfig",
    "RemoteConfig",
    "SessionConfig",
    "AnalyticsConfig",
    "LoggingConfig",
    "load_config",
]
