"""Data models for textecho."""

from textecho.models.outcome import (
    EmptyInput,
    ErrorKind,
    NetworkError,
    ServerError,
    Success,
    TooShort,
    Unknown,
    ValidationError,
    ValidationOutcome,
    is_success,
)

__all__ = [
    "ErrorKind",
    "Success",
    "ValidationError",
    "EmptyInput",
    "TooShort",
    "NetworkError",
    "ServerError",
    "Unknown",
    "ValidationOutcome",
    "is_success",
]
