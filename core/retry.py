"""
Retry/backoff driver for upstream calls.

The default policy never gives up and waits 0.3 ms between attempts, which
is how the studio has always behaved against the resource API: every card
keeps hammering until it gets an answer or the user walks away. Bounded
policies (attempt count, elapsed time, per-attempt timeout) are available
through RetryPolicy and the STUDIO_* settings.

Errors flagged ``retryable = False`` (missing API key, no result, parse
failures) are raised on the first occurrence.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from .errors import RetryExhaustedError, StudioError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# on_retry(attempt_number, delay_ms) is called after each failed attempt
RetryCallback = Callable[[int, float], None]


@dataclass
class RetryPolicy:
    """How long and how often to retry a failing operation"""
    delay_ms: float = 0.3
    max_attempts: Optional[int] = None       # None = unbounded
    max_elapsed: Optional[float] = None      # seconds, None = unbounded
    attempt_timeout: Optional[float] = None  # seconds per attempt
    backoff_factor: float = 1.0              # 1.0 = constant delay
    max_delay_ms: float = 30000.0

    @classmethod
    def unbounded(cls) -> "RetryPolicy":
        return cls()

    @classmethod
    def from_config(cls, config) -> "RetryPolicy":
        """Build a policy from a StudioConfig."""
        return cls(
            delay_ms=config.retry_delay_ms,
            max_attempts=config.max_attempts,
            max_elapsed=config.max_elapsed,
            attempt_timeout=config.attempt_timeout,
        )

    def delay_for(self, attempt: int) -> float:
        """Delay in milliseconds after the given (1-based) failed attempt."""
        delay = self.delay_ms * (self.backoff_factor ** (attempt - 1))
        return min(delay, self.max_delay_ms)

    def should_stop(self, attempt: int, elapsed: float) -> bool:
        if self.max_attempts is not None and attempt >= self.max_attempts:
            return True
        if self.max_elapsed is not None and elapsed >= self.max_elapsed:
            return True
        return False


def _is_terminal(error: BaseException) -> bool:
    return isinstance(error, StudioError) and not error.retryable


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    on_retry: Optional[RetryCallback] = None,
    policy: Optional[RetryPolicy] = None,
) -> T:
    """
    Invoke ``operation`` until it succeeds or the policy gives up.

    Args:
        operation: Zero-argument coroutine factory; called once per attempt
        on_retry: Called with (attempt, delay_ms) after each failed attempt,
            before sleeping. Used by cards to show "(attempt N)" progress.
        policy: Termination and delay settings (default: unbounded, 0.3 ms)

    Returns:
        The operation's result

    Raises:
        StudioError: Non-retryable studio errors, immediately
        RetryExhaustedError: A bounded policy ran out of attempts or time
        asyncio.CancelledError: The surrounding task was cancelled
    """
    policy = policy or RetryPolicy()
    started = time.monotonic()
    attempt = 0

    while True:
        attempt += 1
        try:
            if policy.attempt_timeout is not None:
                return await asyncio.wait_for(operation(), timeout=policy.attempt_timeout)
            return await operation()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if _is_terminal(e):
                raise

            elapsed = time.monotonic() - started
            logger.warning(f"Attempt {attempt} failed. Retrying... ({e})")

            if policy.should_stop(attempt, elapsed):
                raise RetryExhaustedError(attempt, e) from e

            delay_ms = policy.delay_for(attempt)
            if on_retry:
                on_retry(attempt, delay_ms)
            await asyncio.sleep(delay_ms / 1000.0)
