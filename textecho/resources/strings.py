"""Human-facing text for validation outcomes.

The pipeline only deals in canonical outcomes. This module turns an
outcome into a message key plus format arguments, and resolves keys
against a catalog that can be overridden from YAML.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Optional, Protocol

import yaml

from textecho.models import (
    EmptyInput,
    ErrorKind,
    NetworkError,
    ServerError,
    Success,
    TooShort,
    Unknown,
    ValidationOutcome,
)
from textecho.utils.result import ConfigError, Err, Ok, Result


class MessageKey(str, Enum):
    """Keys into the text catalog."""

    VALIDATION_SUCCESS = "validation_success"
    EMPTY_INPUT = "please_enter_some_text"
    TOO_SHORT = "text_must_be_at_least_characters_long"
    NETWORK_ERROR = "network_error_please_check_your_connection"
    SERVER_ERROR = "validation_failed"
    UNKNOWN_ERROR = "an_error_occurred"


DEFAULT_CATALOG: dict[str, str] = {
    MessageKey.VALIDATION_SUCCESS.value: "{0}",
    MessageKey.EMPTY_INPUT.value: "Please enter some text",
    MessageKey.TOO_SHORT.value: "Text must be at least {0} characters long",
    MessageKey.NETWORK_ERROR.value: "Network error. Please check your connection and try again.",
    MessageKey.SERVER_ERROR.value: "Validation failed: {0}",
    MessageKey.UNKNOWN_ERROR.value: "An error occurred: {0}",
}

ERROR_KEYS: dict[ErrorKind, MessageKey] = {
    ErrorKind.EMPTY_INPUT: MessageKey.EMPTY_INPUT,
    ErrorKind.TOO_SHORT: MessageKey.TOO_SHORT,
    ErrorKind.NETWORK_ERROR: MessageKey.NETWORK_ERROR,
    ErrorKind.SERVER_ERROR: MessageKey.SERVER_ERROR,
    ErrorKind.UNKNOWN: MessageKey.UNKNOWN_ERROR,
}


class StringResolver(Protocol):
    """Anything that resolves a message key to display text."""

    def resolve(self, key: str, *args: Any) -> str:
        ...


class TextResources:
    """Catalog-backed StringResolver."""

    def __init__(self, catalog: Optional[dict[str, str]] = None) -> None:
        self.catalog = {**DEFAULT_CATALOG, **(catalog or {})}

    def resolve(self, key: str, *args: Any) -> str:
        """
        Resolve a key and format it with positional arguments.

        Raises:
            KeyError: The key is not in the catalog
        """
        if isinstance(key, MessageKey):
            key = key.value
        template = self.catalog[key]
        return template.format(*args)

    def render(self, outcome: ValidationOutcome) -> str:
        """Render an outcome as display text."""
        key, args = message_for(outcome)
        return self.resolve(key, *args)

    @classmethod
    def from_yaml(cls, path: Path) -> Result["TextResources", ConfigError]:
        """
        Load catalog overrides from a YAML mapping of key -> template.

        Args:
            path: Path to YAML file

        Returns:
            Result with resources or error
        """
        path = Path(path)

        if not path.exists():
            return Err(ConfigError(
                field="resources_file",
                message=f"Resources file not found: {path}",
            ))

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            return Err(ConfigError(
                field="resources_file",
                message=f"Failed to parse YAML: {e}",
            ))

        if not isinstance(data, dict):
            return Err(ConfigError(
                field="resources_file",
                message="Resources file must contain a mapping of key to template",
            ))

        unknown = sorted(set(data) - set(DEFAULT_CATALOG))
        if unknown:
            return Err(ConfigError(
                field="resources_file",
                message=f"Unknown message keys: {', '.join(map(str, unknown))}",
            ))

        return Ok(cls({str(k): str(v) for k, v in data.items()}))


def message_for(outcome: ValidationOutcome) -> tuple[MessageKey, tuple[Any, ...]]:
    """
    Pick the message key and format arguments for an outcome.

    Args:
        outcome: Any ValidationOutcome variant

    Returns:
        Tuple of (key, args)
    """
    if isinstance(outcome, Success):
        return MessageKey.VALIDATION_SUCCESS, (outcome.validated_text,)

    key = ERROR_KEYS[outcome.kind]
    if isinstance(outcome, TooShort):
        return key, (outcome.min_length,)
    if isinstance(outcome, ServerError):
        return key, (outcome.message,)
    if isinstance(outcome, Unknown):
        return key, (outcome.detail,)
    if isinstance(outcome, (EmptyInput, NetworkError)):
        return key, ()

    raise TypeError(f"Unhandled outcome variant: {type(outcome).__name__}")
