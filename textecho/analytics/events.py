"""Analytics event names and property keys."""

from __future__ import annotations

from textecho.models import ErrorKind

# User actions
TEXT_INPUT_CHANGED = "text_input_changed"
INPUT_CLEARED = "input_cleared"
SUBMIT_CLICKED = "submit_clicked"
CLEAR_CLICKED = "clear_clicked"
STATE_RESET = "state_reset"

# Validation events
VALIDATION_SUCCESS = "validation_success"
VALIDATION_ERROR = "validation_error"
VALIDATION_CANCELLED = "validation_cancelled"

# Property keys
PROP_TEXT_LENGTH = "text_length"
PROP_ERROR_TYPE = "error_type"
PROP_VALIDATION_TIME = "validation_time_ms"
PROP_OUTPUT_LENGTH = "output_length"
PROP_REASON = "reason"

# Cancellation reasons
REASON_SUPERSEDED = "superseded"
REASON_CLEARED = "cleared"
REASON_CLOSED = "closed"

ERROR_TYPES: dict[ErrorKind, str] = {
    ErrorKind.EMPTY_INPUT: "empty_input",
    ErrorKind.TOO_SHORT: "too_short",
    ErrorKind.NETWORK_ERROR: "network_error",
    ErrorKind.SERVER_ERROR: "server_error",
    ErrorKind.UNKNOWN: "unknown",
}
