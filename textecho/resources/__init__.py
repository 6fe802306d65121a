"""Text resources for rendering validation outcomes."""

from textecho.resources.strings import (
    DEFAULT_CATALOG,
    ERROR_KEYS,
    MessageKey,
    StringResolver,
    TextResources,
    message_for,
)

__all__ = [
    "MessageKey",
    "StringResolver",
    "TextResources",
    "DEFAULT_CATALOG",
    "ERROR_KEYS",
    "message_for",
]
