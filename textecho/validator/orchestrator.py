"""Single entry point for validating user text."""

from __future__ import annotations

import random
from typing import Optional

from textecho.config.settings import TextEchoConfig
from textecho.models import Success, Unknown, ValidationOutcome
from textecho.utils.logging import get_logger
from textecho.validator.mapper import ResultMapper
from textecho.validator.remote import RemoteValidator
from textecho.validator.rules import RuleEngine

logger = get_logger("validator.orchestrator")


class ValidationOrchestrator:
    """
    Composes the rule engine, remote validator and result mapper.

    Rule failures return immediately without touching the backend. Remote
    failures are classified by the mapper. Cancellation is not caught and
    reaches the caller as asyncio.CancelledError.
    """

    def __init__(
        self,
        rules: RuleEngine,
        remote: RemoteValidator,
        mapper: ResultMapper,
    ) -> None:
        self.rules = rules
        self.remote = remote
        self.mapper = mapper

    async def validate(self, raw: str) -> ValidationOutcome:
        """
        Validate raw user input.

        Args:
            raw: Untrimmed input text

        Returns:
            Success with the trimmed text, or a ValidationError variant
        """
        check = self.rules.check(raw)
        if check.is_err():
            error = check.unwrap_err()
            logger.debug("rules_rejected", kind=error.kind.value)
            return error

        trimmed = check.unwrap()

        try:
            validated = await self.remote.validate(trimmed)
        except Exception as e:
            return self.mapper.map_failure(e)

        if not validated:
            return Unknown(detail="Remote validator returned empty text")

        return Success(validated_text=validated)


def build_orchestrator(
    config: Optional[TextEchoConfig] = None,
    rng: Optional[random.Random] = None,
) -> ValidationOrchestrator:
    """
    Wire the default components from configuration.

    Args:
        config: Application configuration
        rng: Random source for the remote validator

    Returns:
        Ready-to-use ValidationOrchestrator
    """
    config = config or TextEchoConfig()
    return ValidationOrchestrator(
        rules=RuleEngine(min_length=config.rules.min_length),
        remote=RemoteValidator(config.remote, rng=rng),
        mapper=ResultMapper(),
    )
