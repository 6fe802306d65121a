"""Tests for text resources."""

import pytest

from textecho.models import (
    EmptyInput,
    ErrorKind,
    NetworkError,
    ServerError,
    Success,
    TooShort,
    Unknown,
)
from textecho.resources import ERROR_KEYS, MessageKey, TextResources, message_for


class TestMessageFor:
    """Test outcome to message key mapping."""

    def test_every_kind_has_a_key(self):
        """The key table is exhaustive."""
        assert set(ERROR_KEYS) == set(ErrorKind)

    @pytest.mark.parametrize(
        "outcome, key, args",
        [
            (Success("Hello"), MessageKey.VALIDATION_SUCCESS, ("Hello",)),
            (EmptyInput(), MessageKey.EMPTY_INPUT, ()),
            (TooShort(3), MessageKey.TOO_SHORT, (3,)),
            (NetworkError(), MessageKey.NETWORK_ERROR, ()),
            (ServerError("bad"), MessageKey.SERVER_ERROR, ("bad",)),
            (Unknown("ValueError: x"), MessageKey.UNKNOWN_ERROR, ("ValueError: x",)),
        ],
    )
    def test_keys_and_args(self, outcome, key, args):
        """Each variant maps to its key and payload."""
        assert message_for(outcome) == (key, args)


class TestTextResources:
    """Test TextResources."""

    def test_render_defaults(self):
        """Default catalog renders every variant."""
        resources = TextResources()

        assert resources.render(EmptyInput()) == "Please enter some text"
        assert resources.render(TooShort(3)) == "Text must be at least 3 characters long"
        assert resources.render(ServerError("Invalid input detected")) == (
            "Validation failed: Invalid input detected"
        )
        assert resources.render(Unknown("boom")) == "An error occurred: boom"
        assert resources.render(Success("Hello World")) == "Hello World"
        assert "Network error" in resources.render(NetworkError())

    def test_resolve_by_string_key(self):
        """Keys may be given as plain strings."""
        assert TextResources().resolve("text_must_be_at_least_characters_long", 5) == (
            "Text must be at least 5 characters long"
        )

    def test_missing_key(self):
        """Unknown keys raise KeyError."""
        with pytest.raises(KeyError):
            TextResources().resolve("no_such_key")

    def test_from_yaml_overrides(self, tmp_path):
        """A YAML catalog overrides individual templates."""
        path = tmp_path / "strings.yaml"
        path.write_text('please_enter_some_text: "Bitte Text eingeben"\n')

        resources = TextResources.from_yaml(path).unwrap()

        assert resources.render(EmptyInput()) == "Bitte Text eingeben"
        assert resources.render(TooShort(3)) == "Text must be at least 3 characters long"

    def test_from_yaml_unknown_key(self, tmp_path):
        """Typos in the catalog are reported."""
        path = tmp_path / "strings.yaml"
        path.write_text("please_enter_sme_text: typo\n")

        result = TextResources.from_yaml(path)

        assert result.is_err()
        assert "please_enter_sme_text" in result.unwrap_err().message

    def test_from_yaml_not_a_mapping(self, tmp_path):
        """A list is not a catalog."""
        path = tmp_path / "strings.yaml"
        path.write_text("- one\n- two\n")

        assert TextResources.from_yaml(path).is_err()
