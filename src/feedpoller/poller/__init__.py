"""Per-feed polling."""

from feedpoller.poller.backoff import BackoffPolicy
from feedpoller.poller.feed import EmitCallback, FeedPoller

__all__ = ["BackoffPolicy", "EmitCallback", "FeedPoller"]
