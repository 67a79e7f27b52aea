"""Token Bucket Rate Limiter implementation.

This module provides a thread-safe token bucket rate limiter for controlling
request rates to the TMDB API.
"""

from __future__ import annotations

import logging
import threading
import time

from streamflix.shared.constants import TMDBConfig
from streamflix.shared.errors import ApplicationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)


class TokenBucketRateLimiter:
    """Thread-safe token bucket rate limiter.

    The bucket holds up to ``capacity`` tokens, each request consumes one,
    and tokens are refilled continuously at ``refill_rate`` per second.

    Args:
        capacity: Maximum number of tokens the bucket can hold
        refill_rate: Number of tokens to add per second

    Raises:
        ApplicationError: If capacity or refill_rate are not positive
    """

    def __init__(
        self,
        capacity: int = int(TMDBConfig.RATE_LIMIT_RPS),
        refill_rate: float = TMDBConfig.RATE_LIMIT_RPS,
    ) -> None:
        context = ErrorContext(
            operation="rate_limiter_init",
            additional_data={"capacity": capacity, "refill_rate": refill_rate},
        )
        if capacity <= 0:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Capacity must be positive, got: {capacity}",
                context=context,
            )
        if refill_rate <= 0:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Refill rate must be positive, got: {refill_rate}",
                context=context,
            )

        self.capacity = capacity
        self.refill_rate = refill_rate
        self.tokens = float(capacity)
        self.last_refill = time.monotonic()
        self._lock = threading.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        tokens_to_add = (now - self.last_refill) * self.refill_rate
        if tokens_to_add > 0:
            self.tokens = min(self.capacity, self.tokens + tokens_to_add)
            self.last_refill = now

    def try_acquire(self, tokens: int = 1) -> bool:
        """Try to take ``tokens`` from the bucket without blocking.

        Returns:
            True if the tokens were consumed, False if not enough were available

        Raises:
            ApplicationError: If ``tokens`` is not positive or exceeds capacity
        """
        if tokens <= 0 or tokens > self.capacity:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Tokens to acquire must be in 1..{self.capacity}, got: {tokens}",
                context=ErrorContext(
                    operation="rate_limiter_acquire",
                    additional_data={"requested_tokens": tokens},
                ),
            )

        with self._lock:
            self._refill()
            if self.tokens >= tokens:
                self.tokens -= tokens
                return True

        logger.debug("Rate limiter out of tokens (requested %d)", tokens)
        return False

    def get_tokens_available(self) -> int:
        """Return the whole number of tokens currently in the bucket."""
        with self._lock:
            self._refill()
            return int(self.tokens)

    def reset(self) -> None:
        """Refill the bucket to capacity."""
        with self._lock:
            self.tokens = float(self.capacity)
            self.last_refill = time.monotonic()
