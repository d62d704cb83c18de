"""Per-feed runtime state owned by a FeedPoller."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from feedpoller.models.base import FeedStatus

if TYPE_CHECKING:
    from feedpoller.core.exceptions import FetchError
    from feedpoller.dedup.seen import SeenSet
    from feedpoller.models.feed import FeedConfig


@dataclass
class FeedPollerState:
    """Mutable state of one feed's poller.

    Only the owning poller mutates this; everybody else reads it.

    Attributes:
        config: The feed's registration.
        seen_set: Keys already observed for the feed.
        consecutive_failures: Failed cycles since the last success.
        next_poll_at: When the next cycle is due (None while one is running).
        status: ACTIVE, PAUSED or STOPPED.
        cycles: Completed cycles, successful or not.
        last_polled_at: Start time of the last completed cycle.
        last_error: Error of the last cycle, None after a success.
    """

    config: FeedConfig
    seen_set: SeenSet
    consecutive_failures: int = 0
    next_poll_at: datetime | None = None
    status: FeedStatus = FeedStatus.ACTIVE
    cycles: int = 0
    last_polled_at: datetime | None = None
    last_error: FetchError | None = None

    @property
    def feed_id(self) -> str:
        return self.config.feed_id
