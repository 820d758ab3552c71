"""Retry helper with exponential backoff for generation calls."""

from __future__ import annotations

import logging
import time
from typing import Callable, Tuple, Type, TypeVar

from curriculum_assistant.services.gemini_client import GeminiError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResponseParseError(ValueError):
    """Raised when a model reply cannot be turned into the expected result."""


class GenerationFailedError(RuntimeError):
    """Raised when every attempt of a generation has failed."""

    def __init__(self, message: str, *, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


RETRYABLE_ERRORS: Tuple[Type[Exception], ...] = (GeminiError, ResponseParseError)


def with_retry(
    operation: Callable[[], T],
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    retry_on: Tuple[Type[Exception], ...] = RETRYABLE_ERRORS,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``operation`` until it succeeds or ``max_attempts`` is reached.

    The delay before attempt ``n + 1`` is ``base_delay * 2 ** (n - 1)``. A
    :class:`GeminiError` flagged as not retryable is re-raised immediately.
    """

    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error: Exception | None = None
    for attempt in range(max_attempts):
        try:
            return operation()
        except retry_on as exc:
            if isinstance(exc, GeminiError) and not exc.retryable:
                logger.error("Attempt %s: non-retryable error: %s", attempt + 1, exc)
                raise
            last_error = exc
            logger.warning("Attempt %s/%s failed: %s", attempt + 1, max_attempts, exc)

        if attempt + 1 < max_attempts:
            sleep(base_delay * (2 ** attempt))

    raise GenerationFailedError(
        f"Failed to generate content after {max_attempts} attempts",
        attempts=max_attempts,
    ) from last_error


__all__ = ["GenerationFailedError", "ResponseParseError", "RETRYABLE_ERRORS", "with_retry"]
