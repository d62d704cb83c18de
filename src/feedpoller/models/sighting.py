"""Seen record model - tracks when an item key was first observed.

Example:
    >>> from datetime import UTC, datetime
    >>> from feedpoller.models.sighting import SeenRecord
    >>> r = SeenRecord(feed_id="news", key="article-1", first_seen_at=datetime(2026, 1, 1, tzinfo=UTC))
    >>> r.key
    'article-1'
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from feedpoller.models.base import FeedPollerModel


class SeenRecord(FeedPollerModel):
    """First observation of an item key within one feed."""

    feed_id: str = Field(..., description="Feed the key belongs to")
    key: str = Field(..., description="Item key")
    first_seen_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the key was first observed",
    )
