"""Centralized configuration for textecho.

Policy constants (minimum length, simulated latency window, failure
probabilities) live here rather than at call sites. Configuration can be
loaded from YAML files and validated at startup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from textecho.utils.result import ConfigError, Err, Ok, Result


# Business rule defaults
MIN_LENGTH = 3

# Simulated backend defaults
MIN_DELAY_MS = 500
MAX_DELAY_MS = 1500
REJECTION_PROBABILITY = 0.2
REJECTION_MESSAGE = "Invalid input detected"


@dataclass
class RulesConfig:
    """Business rule settings."""

    min_length: int = MIN_LENGTH


@dataclass
class RemoteConfig:
    """Simulated remote validator settings."""

    min_delay_ms: int = MIN_DELAY_MS
    max_delay_ms: int = MAX_DELAY_MS
    rejection_probability: float = REJECTION_PROBABILITY
    rejection_message: str = REJECTION_MESSAGE
    transport_failure_probability: float = 0.0
    seed: Optional[int] = None


@dataclass
class SessionConfig:
    """Session state machine policy."""

    # Editing the input also drops the last validated output
    clear_output_on_edit: bool = False


@dataclass
class AnalyticsConfig:
    """Analytics sink settings."""

    enabled: bool = True
    buffer_size: int = 100


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "info"
    format: str = "json"


@dataclass
class TextEchoConfig:
    """
    Complete application configuration.

    This is the single source of truth for all configuration values.
    """

    rules: RulesConfig = field(default_factory=RulesConfig)
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Optional text resource overrides (set at runtime)
    resources_file: Optional[Path] = None

    @classmethod
    def from_yaml(cls, path: Path) -> Result["TextEchoConfig", ConfigError]:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Result with loaded config or error
        """
        path = Path(path)

        if not path.exists():
            return Err(ConfigError(
                field="path",
                message=f"Configuration file not found: {path}",
            ))

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            return Err(ConfigError(
                field="yaml",
                message=f"Failed to parse YAML: {e}",
            ))
        except OSError as e:
            return Err(ConfigError(
                field="file",
                message=f"Failed to read config file: {e}",
            ))

        if not isinstance(data, dict):
            return Err(ConfigError(
                field="yaml",
                message="Top-level YAML document must be a mapping",
            ))

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Result["TextEchoConfig", ConfigError]:
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Result with loaded config or error
        """
        try:
            rules_data = data.get("rules", {})
            rules = RulesConfig(
                min_length=int(rules_data.get("min_length", MIN_LENGTH)),
            )

            remote_data = data.get("remote", {})
            seed = remote_data.get("seed")
            remote = RemoteConfig(
                min_delay_ms=int(remote_data.get("min_delay_ms", MIN_DELAY_MS)),
                max_delay_ms=int(remote_data.get("max_delay_ms", MAX_DELAY_MS)),
                rejection_probability=float(
                    remote_data.get("rejection_probability", REJECTION_PROBABILITY)
                ),
                rejection_message=str(
                    remote_data.get("rejection_message", REJECTION_MESSAGE)
                ),
                transport_failure_probability=float(
                    remote_data.get("transport_failure_probability", 0.0)
                ),
                seed=int(seed) if seed is not None else None,
            )

            session_data = data.get("session", {})
            session = SessionConfig(
                clear_output_on_edit=bool(session_data.get("clear_output_on_edit", False)),
            )

            analytics_data = data.get("analytics", {})
            analytics = AnalyticsConfig(
                enabled=bool(analytics_data.get("enabled", True)),
                buffer_size=int(analytics_data.get("buffer_size", 100)),
            )

            logging_data = data.get("logging", {})
            logging_config = LoggingConfig(
                level=logging_data.get("level", "info"),
                format=logging_data.get("format", "json"),
            )

            resources_file = data.get("resources_file")

            config = cls(
                rules=rules,
                remote=remote,
                session=session,
                analytics=analytics,
                logging=logging_config,
                resources_file=Path(resources_file) if resources_file else None,
            )

            return Ok(config)

        except (AttributeError, TypeError, ValueError) as e:
            return Err(ConfigError(
                field="unknown",
                message=f"Failed to parse configuration: {e}",
            ))

    def validate(self) -> Result[None, ConfigError]:
        """
        Validate configuration values.

        Returns:
            Result indicating success or validation error
        """
        if self.rules.min_length < 1:
            return Err(ConfigError(
                field="rules.min_length",
                message=f"Must be at least 1, got {self.rules.min_length}",
            ))

        if self.remote.min_delay_ms < 0:
            return Err(ConfigError(
                field="remote.min_delay_ms",
                message=f"Must not be negative, got {self.remote.min_delay_ms}",
            ))
        if self.remote.max_delay_ms < self.remote.min_delay_ms:
            return Err(ConfigError(
                field="remote.max_delay_ms",
                message=(
                    f"Must be at least min_delay_ms ({self.remote.min_delay_ms}), "
                    f"got {self.remote.max_delay_ms}"
                ),
            ))

        for name, value in [
            ("rejection_probability", self.remote.rejection_probability),
            ("transport_failure_probability", self.remote.transport_failure_probability),
        ]:
            if not 0.0 <= value <= 1.0:
                return Err(ConfigError(
                    field=f"remote.{name}",
                    message=f"Must be between 0 and 1, got {value}",
                ))

        total = self.remote.rejection_probability + self.remote.transport_failure_probability
        if total > 1.0:
            return Err(ConfigError(
                field="remote",
                message=f"Failure probabilities must sum to at most 1, got {total}",
            ))

        if self.analytics.buffer_size < 1:
            return Err(ConfigError(
                field="analytics.buffer_size",
                message=f"Must be at least 1, got {self.analytics.buffer_size}",
            ))

        return Ok(None)

    def to_dict(self) -> dict:
        """Convert to dictionary for display."""
        return {
            "rules": {"min_length": self.rules.min_length},
            "remote": {
                "min_delay_ms": self.remote.min_delay_ms,
                "max_delay_ms": self.remote.max_delay_ms,
                "rejection_probability": self.remote.rejection_probability,
                "rejection_message": self.remote.rejection_message,
                "transport_failure_probability": self.remote.transport_failure_probability,
                "seed": self.remote.seed,
            },
            "session": {"clear_output_on_edit": self.session.clear_output_on_edit},
            "analytics": {
                "enabled": self.analytics.enabled,
                "buffer_size": self.analytics.buffer_size,
            },
            "logging": {"level": self.logging.level, "format": self.logging.format},
            "resources_file": str(self.resources_file) if self.resources_file else None,
        }


def load_config(config_dir: Path = None) -> Result[TextEchoConfig, ConfigError]:
    """
    Load configuration from the standard location.

    Loads from config/defaults.yaml when present, otherwise uses defaults.
    A relative resources_file is resolved against the config directory.

    Args:
        config_dir: Configuration directory (defaults to ./config)

    Returns:
        Result with loaded config or error
    """
    if config_dir is None:
        config_dir = Path("./config")

    config_dir = Path(config_dir)

    defaults_path = config_dir / "defaults.yaml"
    if defaults_path.exists():
        result = TextEchoConfig.from_yaml(defaults_path)
        if result.is_err():
            return result
        config = result.unwrap()
    else:
        config = TextEchoConfig()

    if config.resources_file and not config.resources_file.is_absolute():
        config.resources_file = config_dir / config.resources_file

    validation_result = config.validate()
    if validation_result.is_err():
        return Err(validation_result.unwrap_err())

    return Ok(config)
