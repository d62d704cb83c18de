"""FeedPollEngine - public entry point.

The engine is a thin composition root: it wires a fetcher, a parser and
settings into a PollScheduler and exposes registration, the unified event
stream and shutdown.

Example:
    >>> import asyncio
    >>> from feedpoller import FeedConfig, FeedPollEngine
    >>> async def main():
    ...     async with FeedPollEngine() as engine:
    ...         await engine.register_feed(
    ...             FeedConfig(feed_id="news", url="https://example.com/rss")
    ...         )
    ...         async for result in engine.events():
    ...             print(result.feed_id, [i.title for i in result.new_items])
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from feedpoller.core.config import Settings, get_settings
from feedpoller.http.client import HttpFetcher
from feedpoller.parser.xml import parse_feed
from feedpoller.scheduler.poll import PollScheduler

if TYPE_CHECKING:
    import random
    from collections.abc import AsyncIterator

    from feedpoller.models.feed import FeedConfig
    from feedpoller.models.result import PollResult
    from feedpoller.models.state import FeedPollerState
    from feedpoller.protocols.fetch import Fetcher, Parser


class FeedPollEngine:
    """Multi-feed polling engine.

    Args:
        fetcher: Fetch capability (default: an HttpFetcher owned and closed
            by the engine).
        parser: Parse capability (default: ``parse_feed``).
        settings: Engine-wide defaults (default: loaded from environment).
        rng: Random source for start staggering.

    Example:
        >>> from feedpoller.core.engine import FeedPollEngine
        >>> engine = FeedPollEngine()
        >>> engine.feeds()
        []
    """

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        parser: Parser | None = None,
        *,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._owned_fetcher = HttpFetcher() if fetcher is None else None
        self._scheduler = PollScheduler(
            fetcher=fetcher if fetcher is not None else self._owned_fetcher,
            parser=parser if parser is not None else parse_feed,
            settings=self._settings,
            rng=rng,
        )

    @property
    def settings(self) -> Settings:
        """Engine settings."""
        return self._settings

    @property
    def scheduler(self) -> PollScheduler:
        """The underlying scheduler."""
        return self._scheduler

    async def __aenter__(self) -> FeedPollEngine:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.shutdown()

    async def register_feed(self, config: FeedConfig) -> str:
        """Start polling a feed.

        Raises:
            DuplicateFeedError: If the feed id is already active.
            EngineClosedError: If the engine was shut down.
        """
        return await self._scheduler.register_feed(config)

    async def unregister_feed(self, feed_id: str) -> None:
        """Stop polling a feed.

        Raises:
            UnknownFeedError: If the feed id is not active.
        """
        await self._scheduler.unregister_feed(feed_id)

    def feeds(self) -> list[str]:
        """List active feed ids."""
        return self._scheduler.feed_ids()

    def state(self, feed_id: str) -> FeedPollerState:
        """Runtime state of an active feed.

        Raises:
            UnknownFeedError: If the feed id is not active.
        """
        return self._scheduler.get_state(feed_id)

    def events(self) -> AsyncIterator[PollResult]:
        """Lazy stream of every feed's PollResults.

        Ends after shutdown once buffered results are consumed. The stream
        has a single consumer and cannot be restarted; create a new engine
        instead.
        """
        return self._scheduler.subscribe()

    async def shutdown(self) -> None:
        """Stop all feeds, close the event stream, release the HTTP client.

        Idempotent.
        """
        await self._scheduler.shutdown()
        if self._owned_fetcher is not None:
            await self._owned_fetcher.close()


__all__ = ["FeedPollEngine"]
