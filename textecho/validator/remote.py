"""Simulated remote validation service."""

from __future__ import annotations

import asyncio
import random
from typing import Optional

from textecho.config.settings import RemoteConfig
from textecho.utils.logging import get_logger

logger = get_logger("validator.remote")


class ServerRejection(Exception):
    """The remote service rejected the input."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RemoteValidator:
    """
    Stand-in for an external validation backend.

    Each call waits for a latency drawn uniformly from the configured
    window, then either echoes the text back, rejects it with
    ServerRejection, or fails at the transport level with ConnectionError.

    Cancelling the task awaiting validate() abandons the call during the
    delay; nothing is returned or logged for it afterwards.
    """

    def __init__(
        self,
        config: Optional[RemoteConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the remote validator.

        Args:
            config: Latency window and failure probabilities
            rng: Random source; a seeded one is built from config.seed if omitted
        """
        self.config = config or RemoteConfig()
        self._rng = rng if rng is not None else random.Random(self.config.seed)
        self.calls = 0

    def _draw_delay(self) -> float:
        """Draw a latency in seconds from the configured window."""
        delay_ms = self._rng.uniform(self.config.min_delay_ms, self.config.max_delay_ms)
        return delay_ms / 1000.0

    async def validate(self, text: str) -> str:
        """
        Validate text with the simulated backend.

        Args:
            text: Text to validate (already trimmed by the rules)

        Returns:
            The text unchanged

        Raises:
            ServerRejection: The backend rejected the input
            ConnectionError: Simulated transport failure
        """
        self.calls += 1
        delay = self._draw_delay()

        await asyncio.sleep(delay)

        roll = self._rng.random()
        if roll < self.config.rejection_probability:
            logger.info("remote_rejected", delay_seconds=round(delay, 3))
            raise ServerRejection(self.config.rejection_message)

        if roll < self.config.rejection_probability + self.config.transport_failure_probability:
            logger.warning("remote_transport_failed", delay_seconds=round(delay, 3))
            raise ConnectionError("Simulated connection failure")

        logger.debug(
            "remote_accepted",
            delay_seconds=round(delay, 3),
            text_length=len(text),
        )
        return text
