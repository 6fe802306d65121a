"""Tests for configuration loading."""

from pathlib import Path

import pytest

from textecho.config.settings import (
    MAX_DELAY_MS,
    MIN_DELAY_MS,
    MIN_LENGTH,
    TextEchoConfig,
    load_config,
)


class TestTextEchoConfig:
    """Test TextEchoConfig parsing and validation."""

    def test_defaults_are_valid(self):
        """Default configuration passes validation."""
        config = TextEchoConfig()

        assert config.validate().is_ok()
        assert config.rules.min_length == MIN_LENGTH
        assert config.remote.min_delay_ms == MIN_DELAY_MS
        assert config.remote.max_delay_ms == MAX_DELAY_MS
        assert config.session.clear_output_on_edit is False

    def test_from_dict_overrides(self):
        """Values from a dictionary replace defaults."""
        result = TextEchoConfig.from_dict({
            "rules": {"min_length": 5},
            "remote": {
                "min_delay_ms": 0,
                "max_delay_ms": 10,
                "rejection_probability": 0.5,
                "seed": 99,
            },
            "session": {"clear_output_on_edit": True},
            "analytics": {"enabled": False},
        })

        config = result.unwrap()
        assert config.rules.min_length == 5
        assert config.remote.max_delay_ms == 10
        assert config.remote.rejection_probability == 0.5
        assert config.remote.seed == 99
        assert config.session.clear_output_on_edit is True
        assert config.analytics.enabled is False

    def test_from_dict_bad_types(self):
        """Unparseable values are reported, not raised."""
        result = TextEchoConfig.from_dict({"rules": {"min_length": "three"}})

        assert result.is_err()
        assert result.unwrap_err().field == "unknown"

    @pytest.mark.parametrize(
        "data, field",
        [
            ({"rules": {"min_length": 0}}, "rules.min_length"),
            ({"remote": {"min_delay_ms": -1}}, "remote.min_delay_ms"),
            ({"remote": {"min_delay_ms": 900, "max_delay_ms": 100}}, "remote.max_delay_ms"),
            ({"remote": {"rejection_probability": 1.5}}, "remote.rejection_probability"),
            (
                {"remote": {"rejection_probability": 0.7, "transport_failure_probability": 0.5}},
                "remote",
            ),
            ({"analytics": {"buffer_size": 0}}, "analytics.buffer_size"),
        ],
    )
    def test_validate_rejects(self, data, field):
        """Out-of-range values fail validation with the offending field."""
        config = TextEchoConfig.from_dict(data).unwrap()

        result = config.validate()

        assert result.is_err()
        assert result.unwrap_err().field == field

    def test_from_yaml_missing(self, tmp_path):
        """A missing file is an error result."""
        result = TextEchoConfig.from_yaml(tmp_path / "missing.yaml")

        assert result.is_err()
        assert result.unwrap_err().field == "path"

    def test_from_yaml_invalid(self, tmp_path):
        """Broken YAML is an error result."""
        path = tmp_path / "defaults.yaml"
        path.write_text("rules: [unclosed\n")

        result = TextEchoConfig.from_yaml(path)

        assert result.is_err()
        assert result.unwrap_err().field == "yaml"

    def test_to_dict_round_numbers(self):
        """to_dict exposes the effective values."""
        data = TextEchoConfig().to_dict()

        assert data["rules"]["min_length"] == MIN_LENGTH
        assert data["remote"]["rejection_message"] == "Invalid input detected"
        assert data["resources_file"] is None


class TestLoadConfig:
    """Test load_config."""

    def test_missing_directory_uses_defaults(self, tmp_path):
        """No defaults.yaml means built-in defaults."""
        config = load_config(tmp_path / "nowhere").unwrap()

        assert config == TextEchoConfig()

    def test_loads_defaults_yaml(self, tmp_path):
        """defaults.yaml is read and validated."""
        (tmp_path / "defaults.yaml").write_text(
            "rules:\n  min_length: 4\nresources_file: strings.yaml\n"
        )

        config = load_config(tmp_path).unwrap()

        assert config.rules.min_length == 4
        assert config.resources_file == tmp_path / "strings.yaml"

    def test_invalid_values_rejected(self, tmp_path):
        """Validation runs after loading."""
        (tmp_path / "defaults.yaml").write_text("remote:\n  rejection_probability: 2\n")

        result = load_config(tmp_path)

        assert result.is_err()
        assert "rejection_probability" in str(result.unwrap_err())

    def test_repository_defaults(self):
        """The shipped config/defaults.yaml is valid."""
        config_dir = Path(__file__).resolve().parent.parent / "config"

        config = load_config(config_dir).unwrap()

        assert config.rules.min_length == MIN_LENGTH
        assert config.remote.seed is None
