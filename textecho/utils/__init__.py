"""Utility modules for textecho."""

from textecho.utils.logging import (
    configure_logging,
    get_logger,
    new_session_id,
    set_attempt,
    set_session_id,
)
from textecho.utils.result import (
    ConfigError,
    Err,
    ExitCode,
    Ok,
    Result,
    ResultError,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "new_session_id",
    "set_session_id",
    "set_attempt",
    # Result
    "Ok",
    "Err",
    "Result",
    "ResultError",
    "ConfigError",
    "ExitCode",
]
