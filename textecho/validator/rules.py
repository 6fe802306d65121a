"""Business rules - local pre-validation that fails fast before any remote call.

Rules run in order against the raw input. The first failing rule decides
the error; when every rule passes the trimmed text is handed back so
callers never re-trim.
"""

from __future__ import annotations

from typing import Optional

from textecho.config.settings import MIN_LENGTH
from textecho.models import EmptyInput, TooShort, ValidationError
from textecho.utils.result import Err, Ok, Result


class RuleEngine:
    """
    Synchronous, side-effect free rule checks.

    Each rule returns a Result - Ok(trimmed) if the check passes,
    Err(ValidationError) if it fails.
    """

    def __init__(self, min_length: int = MIN_LENGTH) -> None:
        """
        Initialize the rule engine.

        Args:
            min_length: Minimum trimmed length accepted
        """
        if min_length < 1:
            raise ValueError(f"min_length must be at least 1, got {min_length}")
        self.min_length = min_length

    def check(self, raw: str) -> Result[str, ValidationError]:
        """
        Run all rules.

        Args:
            raw: Raw user input

        Returns:
            Ok with the trimmed text, or Err with the first failing rule
        """
        return self.check_not_blank(raw).and_then(self.check_min_length)

    def check_not_blank(self, raw: str) -> Result[str, ValidationError]:
        """Reject input that is empty after trimming."""
        trimmed = raw.strip()
        if not trimmed:
            return Err(EmptyInput())
        return Ok(trimmed)

    def check_min_length(self, trimmed: str) -> Result[str, ValidationError]:
        """Reject trimmed input shorter than the policy minimum."""
        if len(trimmed) < self.min_length:
            return Err(TooShort(min_length=self.min_length))
        return Ok(trimmed)

    def check_rules(self, raw: str) -> Optional[ValidationError]:
        """Return the first rule violation, or None if the input passes."""
        result = self.check(raw)
        if result.is_err():
            return result.unwrap_err()
        return None


def check_rules(raw: str, min_length: int = MIN_LENGTH) -> Optional[ValidationError]:
    """
    Convenience function to run the default rules.

    Args:
        raw: Raw user input
        min_length: Minimum trimmed length accepted

    Returns:
        The first rule violation, or None
    """
    return RuleEngine(min_length).check_rules(raw)
