"""Core: configuration, exceptions, logging and the engine facade."""

from feedpoller.core.config import Settings, get_settings
from feedpoller.core.engine import FeedPollEngine
from feedpoller.core.exceptions import (
    ChannelClosedError,
    DuplicateFeedError,
    EngineClosedError,
    FeedPollerError,
    FetchError,
    HttpStatusError,
    ParseError,
    TransportError,
    UnknownFeedError,
)

__all__ = [
    "ChannelClosedError",
    "DuplicateFeedError",
    "EngineClosedError",
    "FeedPollEngine",
    "FeedPollerError",
    "FetchError",
    "HttpStatusError",
    "ParseError",
    "Settings",
    "TransportError",
    "UnknownFeedError",
    "get_settings",
]
