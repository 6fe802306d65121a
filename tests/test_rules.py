"""Tests for the business rule engine."""

import pytest

from textecho.models import EmptyInput, TooShort
from textecho.validator.rules import RuleEngine, check_rules


class TestRuleEngine:
    """Test RuleEngine checks."""

    @pytest.mark.parametrize("raw", ["", " ", "   ", "\t\n", " \r\n\t "])
    def test_blank_input_is_empty(self, raw):
        """Whitespace-only input is rejected as EmptyInput."""
        assert RuleEngine().check_rules(raw) == EmptyInput()

    @pytest.mark.parametrize("raw", ["a", "Hi", "  Hi  ", "\tab\n"])
    def test_short_input_is_too_short(self, raw):
        """Trimmed input under the minimum is rejected with the minimum."""
        assert RuleEngine().check_rules(raw) == TooShort(min_length=3)

    def test_hi_is_too_short(self):
        """Concrete scenario: 'Hi' has two characters."""
        error = check_rules("Hi")

        assert isinstance(error, TooShort)
        assert error.min_length == 3

    def test_valid_input_passes(self):
        """Input at or above the minimum passes."""
        assert RuleEngine().check_rules("abc") is None
        assert RuleEngine().check_rules("Hello World") is None

    def test_check_returns_trimmed_text(self):
        """The value used for the length check is handed back."""
        result = RuleEngine().check("   Hello World \n")

        assert result.is_ok()
        assert result.unwrap() == "Hello World"

    def test_length_is_measured_after_trimming(self):
        """Padding does not count toward the minimum."""
        result = RuleEngine().check("  ab  ")

        assert result.is_err()
        assert result.unwrap_err() == TooShort(min_length=3)

    def test_custom_min_length(self):
        """The minimum is a policy value."""
        engine = RuleEngine(min_length=5)

        assert engine.check_rules("abcd") == TooShort(min_length=5)
        assert engine.check_rules("abcde") is None

    def test_invalid_min_length_rejected(self):
        """A minimum below one makes no sense."""
        with pytest.raises(ValueError):
            RuleEngine(min_length=0)

    @pytest.mark.parametrize("raw", ["", "  ", "Hi", "Hello", "  padded text  "])
    def test_check_is_idempotent(self, raw):
        """Checking twice gives the same answer."""
        engine = RuleEngine()

        assert engine.check(raw) == engine.check(raw)
        assert engine.check_rules(raw) == engine.check_rules(raw)
