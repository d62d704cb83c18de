"""
feedpoller - Multi-feed RSS/Atom polling engine.

feedpoller polls many feeds concurrently on independent schedules,
remembers which items each feed already delivered, and emits one unified
stream of PollResult events with only the new items.

Key Features:
- Independent per-feed schedules with staggered starts
- Per-feed deduplication with bounded memory
- Exponential backoff and Paused status for failing feeds
- One broken feed never stalls the others
- Pluggable fetch and parse capabilities (httpx and ElementTree by default)

Quick Start:
    >>> from feedpoller import FeedConfig, FeedPollEngine
    >>> async with FeedPollEngine() as engine:
    ...     await engine.register_feed(FeedConfig(feed_id="news", url="https://..."))
    ...     async for result in engine.events():
    ...         print(result.feed_id, len(result.new_items))

Architecture:
    Engine: FeedPollEngine
    Scheduling: PollScheduler, FeedPoller, BackoffPolicy
    Deduplication: SeenSet, item_key
    Collaborators: HttpFetcher, parse_feed
"""

# Core orchestration
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

# Deduplication
from feedpoller.dedup.keys import item_key
from feedpoller.dedup.seen import SeenSet

# Collaborators
from feedpoller.http.client import HttpFetcher

# Models
from feedpoller.models import (
    FeedConfig,
    FeedFormat,
    FeedItem,
    FeedPollerState,
    FeedStatus,
    FetchResponse,
    LinkRef,
    ParsedDocument,
    PollResult,
    RawItem,
    SeenRecord,
)
from feedpoller.parser.normalize import normalize_item
from feedpoller.parser.xml import parse_feed

# Polling
from feedpoller.poller.backoff import BackoffPolicy
from feedpoller.poller.feed import FeedPoller
from feedpoller.protocols.fetch import Fetcher, Parser
from feedpoller.queue.channel import ResultChannel
from feedpoller.reporter.console import ConsoleReporter
from feedpoller.scheduler.poll import PollScheduler

__version__ = "0.1.0"

__all__ = [
    "BackoffPolicy",
    "ChannelClosedError",
    "ConsoleReporter",
    "DuplicateFeedError",
    "EngineClosedError",
    "FeedConfig",
    "FeedFormat",
    "FeedItem",
    "FeedPollEngine",
    "FeedPoller",
    "FeedPollerError",
    "FeedPollerState",
    "FeedStatus",
    "FetchError",
    "FetchResponse",
    "Fetcher",
    "HttpFetcher",
    "HttpStatusError",
    "LinkRef",
    "ParseError",
    "ParsedDocument",
    "Parser",
    "PollResult",
    "PollScheduler",
    "RawItem",
    "ResultChannel",
    "SeenRecord",
    "SeenSet",
    "Settings",
    "TransportError",
    "UnknownFeedError",
    "__version__",
    "get_settings",
    "item_key",
    "normalize_item",
    "parse_feed",
]
