"""Canonical validation outcomes.

A validation attempt ends in exactly one of these variants:

    Success(validated_text)
    EmptyInput | TooShort(min_length) | NetworkError
        | ServerError(message) | Unknown(detail)

Error variants share the ValidationError base and carry an ErrorKind so
every table keyed by kind can be checked for completeness.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Union


class ErrorKind(str, Enum):
    """Discriminator for the error variants."""

    EMPTY_INPUT = "empty_input"
    TOO_SHORT = "too_short"
    NETWORK_ERROR = "network_error"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Success:
    """Validation passed; carries the normalized text."""

    validated_text: str

    def __post_init__(self) -> None:
        if not self.validated_text:
            raise ValueError("Success requires non-empty validated_text")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"type": "success", "validated_text": self.validated_text}


@dataclass(frozen=True)
class ValidationError(ABC):
    """Base class for every error outcome."""

    @property
    @abstractmethod
    def kind(self) -> ErrorKind:
        """Discriminator for this variant."""

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"type": "error", "kind": self.kind.value}


@dataclass(frozen=True)
class EmptyInput(ValidationError):
    """Input was empty or whitespace-only."""

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.EMPTY_INPUT


@dataclass(frozen=True)
class TooShort(ValidationError):
    """Trimmed input is shorter than the policy minimum."""

    min_length: int

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.TOO_SHORT

    def to_dict(self) -> dict:
        return {**super().to_dict(), "min_length": self.min_length}


@dataclass(frozen=True)
class NetworkError(ValidationError):
    """Transport-level failure."""

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.NETWORK_ERROR


@dataclass(frozen=True)
class ServerError(ValidationError):
    """The remote service explicitly rejected the input."""

    message: str

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.SERVER_ERROR

    def to_dict(self) -> dict:
        return {**super().to_dict(), "message": self.message}


@dataclass(frozen=True)
class Unknown(ValidationError):
    """Unclassified failure; detail is kept for diagnostics."""

    detail: str

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.UNKNOWN

    def to_dict(self) -> dict:
        return {**super().to_dict(), "detail": self.detail}


ValidationOutcome = Union[Success, ValidationError]


def is_success(outcome: ValidationOutcome) -> bool:
    """Check if an outcome is the Success variant."""
    return isinstance(outcome, Success)
