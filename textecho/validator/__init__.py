"""Text validation pipeline.

    raw text -> RuleEngine -> RemoteValidator -> ResultMapper -> ValidationOutcome

ValidationOrchestrator ties the stages together; build_orchestrator wires
them from configuration.
"""

from textecho.validator.mapper import ResultMapper, describe_failure, map_failure
from textecho.validator.orchestrator import ValidationOrchestrator, build_orchestrator
from textecho.validator.remote import RemoteValidator, ServerRejection
from textecho.validator.rules import RuleEngine, check_rules

__all__ = [
    # Rules
    "RuleEngine",
    "check_rules",
    # Remote
    "RemoteValidator",
    "ServerRejection",
    # Mapper
    "ResultMapper",
    "map_failure",
    "describe_failure",
    # Orchestrator
    "ValidationOrchestrator",
    "build_orchestrator",
]
