"""Poll interval calculation with exponential backoff.

Example:
    >>> from feedpoller.poller.backoff import BackoffPolicy
    >>> policy = BackoffPolicy(base_interval=60.0)
    >>> policy.interval(0), policy.interval(1), policy.interval(2)
    (60.0, 120.0, 240.0)
    >>> policy.interval(9)
    600.0
"""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class BackoffPolicy:
    """Interval between poll cycles for one feed.

    Attributes:
        base_interval: Interval in seconds after a successful cycle.
        cap_multiplier: Maximum interval as a multiple of base_interval.
        exponential_base: Multiplier applied per consecutive failure.
        jitter: Random jitter factor (0-1) applied to backoff intervals only.
    """

    base_interval: float
    cap_multiplier: float = 10.0
    exponential_base: float = 2.0
    jitter: float = 0.0

    @property
    def max_interval(self) -> float:
        """The capped backoff interval in seconds."""
        return self.base_interval * self.cap_multiplier

    def interval(self, consecutive_failures: int, *, paused: bool = False) -> float:
        """Calculate the wait before the next cycle.

        Args:
            consecutive_failures: Failed cycles since the last success.
            paused: Whether the feed is Paused; Paused feeds always wait the
                capped interval.

        Returns:
            Delay in seconds.
        """
        if consecutive_failures <= 0 and not paused:
            return self.base_interval

        if paused:
            delay = self.max_interval
        else:
            # Exponential backoff
            delay = self.base_interval * (self.exponential_base**consecutive_failures)
            # Cap at max_interval
            delay = min(delay, self.max_interval)

        # Add jitter
        if self.jitter > 0:
            jitter_amount = delay * self.jitter
            delay += random.uniform(-jitter_amount, jitter_amount)

        return max(0.0, delay)


__all__ = ["BackoffPolicy"]
