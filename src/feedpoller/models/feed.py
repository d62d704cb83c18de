"""Feed configuration model.

Example:
    >>> from feedpoller.models.feed import FeedConfig
    >>> config = FeedConfig(feed_id="news", url="https://example.com/rss", poll_interval_ms=30_000)
    >>> config.poll_interval.total_seconds()
    30.0
"""

from __future__ import annotations

from datetime import timedelta
from urllib.parse import urlparse

from pydantic import Field, field_validator

from feedpoller.models.base import FeedPollerModel


class FeedConfig(FeedPollerModel):
    """Registration record for one feed.

    Immutable once registered; replacing a feed's config means unregistering
    and registering it again.

    Example:
        >>> from feedpoller.models.feed import FeedConfig
        >>> FeedConfig(feed_id="f1", url="ftp://example.com/rss")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ValidationError: ...
    """

    feed_id: str = Field(..., min_length=1, description="Unique feed identifier")
    url: str = Field(..., description="RSS or Atom document URL")
    poll_interval_ms: int = Field(default=60_000, gt=0, description="Base interval between cycles")
    max_items_per_fetch: int = Field(default=50, ge=1, description="Leading items considered per cycle")
    fetch_timeout_ms: int | None = Field(default=None, gt=0, description="Overrides the engine fetch timeout")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra request headers")

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        result = urlparse(value)
        if result.scheme not in ("http", "https") or not result.netloc:
            raise ValueError("Invalid URL format: only http and https are supported")
        return value

    @property
    def poll_interval(self) -> timedelta:
        """Base poll interval as a timedelta."""
        return timedelta(milliseconds=self.poll_interval_ms)
