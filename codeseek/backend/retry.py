# codeseek/backend/retry.py
"""
Bounded retry with exponential backoff.

Only failures the policy calls retryable are retried. The wait before
retry ``n`` (0-based) is ``base_delay * 2**n``. The sleep function is
injectable so tests can run without waiting.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from codeseek.core.exceptions import NetworkError, ServerError
from codeseek.logging.logger import get_logger
from codeseek.logging.tags import BACKEND

logger = get_logger(__name__)

T = TypeVar("T")


def is_retryable_error(error: BaseException) -> bool:
    """Connection failures, timeouts and 5xx answers are worth another try."""
    return isinstance(error, (NetworkError, ServerError))


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay: float = 1.0  # seconds
    is_retryable: Callable[[BaseException], bool] = field(default=is_retryable_error)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.base_delay < 0:
            raise ValueError(f"base_delay must be >= 0, got {self.base_delay}")

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * (2**attempt)


UPLOAD_RETRY_POLICY = RetryPolicy(max_attempts=3, base_delay=1.0)
SEARCH_RETRY_POLICY = RetryPolicy(max_attempts=3, base_delay=2.0)


def with_retry(
    action: Callable[[], T],
    policy: RetryPolicy = UPLOAD_RETRY_POLICY,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call ``action`` until it succeeds or the policy gives up.

    The last error is re-raised unchanged when it is not retryable or the
    attempts are exhausted.
    """
    for attempt in range(policy.max_attempts):
        try:
            return action()
        except Exception as e:
            if not policy.is_retryable(e) or attempt == policy.max_attempts - 1:
                logger.error(f"{BACKEND} Request failed after {attempt + 1} attempts: {e}")
                raise

            wait = policy.delay_for(attempt)
            logger.warning(
                f"{BACKEND} Request failed (attempt {attempt + 1}/{policy.max_attempts}): {e}. "
                f"Retrying in {wait:g}s..."
            )
            sleep(wait)

    raise AssertionError("unreachable")  # loop always returns or raises


__all__ = [
    "RetryPolicy",
    "UPLOAD_RETRY_POLICY",
    "SEARCH_RETRY_POLICY",
    "with_retry",
    "is_retryable_error",
]
