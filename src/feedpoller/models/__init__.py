"""Data models for feedpoller."""

from feedpoller.models.base import FeedPollerModel, FeedStatus
from feedpoller.models.feed import FeedConfig
from feedpoller.models.item import FeedFormat, FeedItem, LinkRef, ParsedDocument, RawItem
from feedpoller.models.result import FetchResponse, PollResult
from feedpoller.models.sighting import SeenRecord
from feedpoller.models.state import FeedPollerState

__all__ = [
    "FeedConfig",
    "FeedFormat",
    "FeedItem",
    "FeedPollerModel",
    "FeedPollerState",
    "FeedStatus",
    "FetchResponse",
    "LinkRef",
    "ParsedDocument",
    "PollResult",
    "RawItem",
    "SeenRecord",
]
