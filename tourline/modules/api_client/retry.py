"""
Retry policy for the HTTP client.

Transient failures (no response at all, or a status in the retryable set)
are retried with exponential backoff:

    delay = base_delay * 2 ** attempt * (1 + U[0, jitter))

where attempt is the number of retries already performed. Since jitter is
below 100%, consecutive delays are strictly increasing.
"""

import random
from dataclasses import dataclass, field
from typing import Callable

from tourline.shared.config import Settings

from .exceptions import ApiError, NetworkError
from .models import RetryContext

DEFAULT_RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


@dataclass(frozen=True)
class RetryPolicy:
    """
    Attributes:
        max_retries: Retries allowed beyond the first dispatch
        base_delay: Delay before the first retry, in seconds
        jitter: Upper bound (exclusive) of the random delay fraction
        retryable_status_codes: Statuses treated as transient
        random_source: Returns a float in [0, 1)
    """

    max_retries: int = 3
    base_delay: float = 1.0
    jitter: float = 0.1
    retryable_status_codes: frozenset[int] = DEFAULT_RETRYABLE_STATUS_CODES
    random_source: Callable[[], float] = field(default=random.random, compare=False, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_retries=settings.max_retries,
            base_delay=settings.retry_base_delay,
            jitter=settings.retry_jitter,
            retryable_status_codes=frozenset(settings.retryable_status_codes),
        )

    def is_retryable(self, error: BaseException) -> bool:
        """Transport-level classification: no response, or a transient status."""
        if isinstance(error, NetworkError):
            return True
        if isinstance(error, ApiError):
            return error.status_code in self.retryable_status_codes
        return False

    def should_retry(self, error: BaseException, context: RetryContext) -> bool:
        return self.is_retryable(error) and context.attempt < self.max_retries

    def compute_delay(self, attempt: int) -> float:
        """Backoff before retry number attempt + 1."""
        return self.base_delay * (2 ** attempt) * (1 + self.jitter * self.random_source())

    def next_context(self, context: RetryContext) -> RetryContext:
        """Build the context for the next attempt without touching the current one."""
        return RetryContext(
            attempt=context.attempt + 1,
            delay=self.compute_delay(context.attempt),
        )
