"""Transient per-cycle records.

``FetchResponse`` is what a fetcher returns; ``PollResult`` is what every
poll cycle emits onto the unified output channel. Neither is persisted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from feedpoller.core.exceptions import FetchError
    from feedpoller.models.item import FeedItem


@dataclass(frozen=True)
class FetchResponse:
    """Raw HTTP answer from a fetcher.

    Example:
        >>> from feedpoller.models.result import FetchResponse
        >>> FetchResponse(status=200, body=b"<rss/>").ok
        True
    """

    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self.status < 300

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


@dataclass(frozen=True)
class PollResult:
    """Outcome of one poll cycle for one feed.

    Exactly one is emitted per cycle, so observers can tell "polled, nothing
    new" (``ok`` with empty ``new_items``) from "poll failed" (``error`` set).

    Example:
        >>> from feedpoller.models.result import PollResult
        >>> result = PollResult(feed_id="news")
        >>> result.ok, result.new_items
        (True, ())
    """

    feed_id: str
    fetched_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    new_items: tuple[FeedItem, ...] = ()
    error: FetchError | None = None
    not_modified: bool = False

    @property
    def ok(self) -> bool:
        """True when the cycle completed without a fetch error."""
        return self.error is None
