"""
kvfacade - Backoff Policy

Retry schedule for the exclusive set: how many extra attempts to make and
how long to wait between them.

The default policy reproduces a fixed 5 ms poll repeated 10 times. Growth
and jitter are available for callers contending on hot keys.
"""

import random
from dataclasses import dataclass

DEFAULT_ATTEMPTS = 10
DEFAULT_INTERVAL = 0.005


@dataclass(frozen=True)
class BackoffPolicy:
    """
    Configuration for retry behavior.

    Attributes:
        attempts: Retries after the first attempt (default: 10)
        interval: Delay before the first retry in seconds (default: 0.005)
        exponential_base: Growth factor per retry, 1.0 keeps the delay fixed (default: 1.0)
        max_interval: Cap on a single delay in seconds (default: 1.0)
        jitter: Add random jitter to spread out competing callers (default: False)
        jitter_factor: Jitter randomization factor 0-1 (default: 0.1)
    """

    attempts: int = DEFAULT_ATTEMPTS
    interval: float = DEFAULT_INTERVAL
    exponential_base: float = 1.0
    max_interval: float = 1.0
    jitter: bool = False
    jitter_factor: float = 0.1

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.attempts < 0:
            raise ValueError("attempts must be non-negative")
        if self.interval < 0:
            raise ValueError("interval must be non-negative")
        if self.max_interval < self.interval:
            raise ValueError("max_interval must be >= interval")
        if self.exponential_base < 1.0:
            raise ValueError("exponential_base must be >= 1.0")
        if not 0 <= self.jitter_factor <= 1:
            raise ValueError("jitter_factor must be between 0 and 1")

    def delay(self, attempt: int) -> float:
        """Delay in seconds to wait after failed attempt number ``attempt`` (0-indexed)."""
        return backoff_delay(
            attempt=attempt,
            interval=self.interval,
            exponential_base=self.exponential_base,
            max_interval=self.max_interval,
            jitter=self.jitter,
            jitter_factor=self.jitter_factor,
        )

    def with_attempts(self, attempts: int) -> "BackoffPolicy":
        """Copy of this policy with a different retry count."""
        return BackoffPolicy(
            attempts=attempts,
            interval=self.interval,
            exponential_base=self.exponential_base,
            max_interval=self.max_interval,
            jitter=self.jitter,
            jitter_factor=self.jitter_factor,
        )

    @property
    def worst_case_wait(self) -> float:
        """Upper bound on total sleep time without jitter."""
        return sum(
            backoff_delay(i, self.interval, self.exponential_base, self.max_interval, jitter=False)
            for i in range(self.attempts)
        )


def backoff_delay(
    attempt: int,
    interval: float = DEFAULT_INTERVAL,
    exponential_base: float = 1.0,
    max_interval: float = 1.0,
    jitter: bool = False,
    jitter_factor: float = 0.1,
) -> float:
    """
    Calculate the delay before the next attempt.

    Args:
        attempt: Current attempt number (0-indexed)
        interval: Initial delay in seconds
        exponential_base: Base for exponential growth
        max_interval: Maximum delay cap
        jitter: Whether to add random jitter
        jitter_factor: Jitter randomization factor (0-1)

    Returns:
        Delay in seconds

    Example:
        >>> backoff_delay(0)  # 0.005
        >>> backoff_delay(3)  # 0.005
        >>> backoff_delay(3, interval=0.005, exponential_base=2.0)  # 0.04
    """
    delay = min(interval * (exponential_base**attempt), max_interval)

    if jitter and jitter_factor > 0:
        jitter_amount = delay * jitter_factor
        delay = max(0.0, delay + random.uniform(-jitter_amount, jitter_amount))

    return delay
