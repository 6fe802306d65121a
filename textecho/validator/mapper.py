"""Classification of remote failures into the canonical error taxonomy."""

from __future__ import annotations

import asyncio

from textecho.models import NetworkError, ServerError, Unknown, ValidationError
from textecho.utils.logging import get_logger
from textecho.validator.remote import ServerRejection

logger = get_logger("validator.mapper")


def describe_failure(failure: BaseException) -> str:
    """Render an exception as '<TypeName>: <message>' for diagnostics."""
    message = str(failure)
    if message:
        return f"{type(failure).__name__}: {message}"
    return type(failure).__name__


class ResultMapper:
    """
    Maps failures raised by the remote validator to ValidationError variants.

    Priority order:
        1. ServerRejection -> ServerError(message)
        2. OSError family (ConnectionError, TimeoutError, ...) -> NetworkError
        3. asyncio.CancelledError -> re-raised, never mapped
        4. anything else -> Unknown(detail)
    """

    def map_failure(self, failure: BaseException) -> ValidationError:
        """
        Classify a failure.

        Args:
            failure: Exception raised while validating remotely

        Returns:
            The matching error variant

        Raises:
            asyncio.CancelledError: Cancellation is propagated untouched
        """
        if isinstance(failure, ServerRejection):
            return ServerError(message=failure.message)

        if isinstance(failure, OSError):
            return NetworkError()

        if isinstance(failure, asyncio.CancelledError):
            raise failure

        detail = describe_failure(failure)
        logger.warning("unclassified_failure", detail=detail)
        return Unknown(detail=detail)


def map_failure(failure: BaseException) -> ValidationError:
    """Classify a failure with the default mapper."""
    return ResultMapper().map_failure(failure)
