"""Multi-feed poll scheduler.

The PollScheduler owns one FeedPoller per active feed, staggers their first
cycles, and fans every PollResult into a single ResultChannel.

Example:
    >>> from feedpoller.http import HttpFetcher
    >>> from feedpoller.parser import parse_feed
    >>> scheduler = PollScheduler(fetcher=HttpFetcher(), parser=parse_feed)
    >>> len(scheduler)
    0
    >>> # await scheduler.register_feed(FeedConfig(feed_id="news", url="https://example.com/rss"))
    >>> # async for result in scheduler.subscribe(): ...
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from feedpoller.core.config import Settings, get_settings
from feedpoller.core.exceptions import DuplicateFeedError, EngineClosedError, UnknownFeedError
from feedpoller.poller.feed import FeedPoller
from feedpoller.queue.channel import ResultChannel

if TYPE_CHECKING:
    from feedpoller.models.feed import FeedConfig
    from feedpoller.models.result import PollResult
    from feedpoller.models.state import FeedPollerState
    from feedpoller.protocols.fetch import Fetcher, Parser

logger = logging.getLogger(__name__)


class PollScheduler:
    """Runs many feeds concurrently on independent schedules.

    Feeds share nothing except the output channel. Results of one feed keep
    their cycle order; results of different feeds interleave by emission
    time.

    Args:
        fetcher: Async fetch capability shared by all pollers.
        parser: Parse capability shared by all pollers.
        settings: Engine-wide defaults.
        channel: Output channel (default: a new ResultChannel sized by
            ``settings.channel_size``).
        rng: Random source for start staggering.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        parser: Parser,
        *,
        settings: Settings | None = None,
        channel: ResultChannel | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._parser = parser
        self._settings = settings or get_settings()
        if channel is None:
            channel = ResultChannel(maxsize=self._settings.channel_size)
        self._channel = channel
        self._rng = rng or random.Random()
        self._pollers: dict[str, FeedPoller] = {}
        # Stops of unregistered feeds that have not finished yet
        self._stopping: set[asyncio.Task[None]] = set()
        self._shutdown_task: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def channel(self) -> ResultChannel:
        """The unified output channel."""
        return self._channel

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def closed(self) -> bool:
        """True once shutdown() started."""
        return self._closed

    def __len__(self) -> int:
        return len(self._pollers)

    def __contains__(self, feed_id: object) -> bool:
        return feed_id in self._pollers

    def feed_ids(self) -> list[str]:
        """List active feed ids in registration order."""
        return list(self._pollers)

    def get_state(self, feed_id: str) -> FeedPollerState:
        """Get the runtime state of an active feed.

        Raises:
            UnknownFeedError: If feed_id is not active.
        """
        try:
            return self._pollers[feed_id].state
        except KeyError:
            raise UnknownFeedError(feed_id) from None

    def stagger_delay(self, config: FeedConfig) -> float:
        """Initial delay in seconds, uniform in [0, interval / 4]."""
        if not self._settings.stagger_start:
            return 0.0
        return self._rng.uniform(0.0, config.poll_interval_ms / 4000)

    async def register_feed(self, config: FeedConfig) -> str:
        """Register a feed and start polling it.

        Args:
            config: Feed registration.

        Returns:
            The feed id.

        Raises:
            DuplicateFeedError: If the feed id is already active.
            EngineClosedError: If the scheduler was shut down.
        """
        if self._closed:
            raise EngineClosedError("Scheduler is shut down")
        if config.feed_id in self._pollers:
            raise DuplicateFeedError(config.feed_id)

        if self._settings.seen_capacity < config.max_items_per_fetch:
            logger.warning(
                "Feed '%s': seen capacity %d is below max_items_per_fetch %d; items may be re-emitted",
                config.feed_id,
                self._settings.seen_capacity,
                config.max_items_per_fetch,
            )

        poller = FeedPoller(
            config,
            fetcher=self._fetcher,
            parser=self._parser,
            emit=self._channel.publish,
            settings=self._settings,
        )
        self._pollers[config.feed_id] = poller

        delay = self.stagger_delay(config)
        poller.start(initial_delay=delay)
        logger.info(
            "Registered feed '%s' (%s), every %dms, first poll in %.2fs",
            config.feed_id,
            config.url,
            config.poll_interval_ms,
            delay,
        )
        return config.feed_id

    async def unregister_feed(self, feed_id: str) -> None:
        """Stop and remove a feed.

        The feed leaves the active set immediately; the call returns after
        any in-flight cycle finished, so no result for the feed is emitted
        afterwards.

        Raises:
            UnknownFeedError: If feed_id is not active (including a second
                call for the same id).
        """
        poller = self._pollers.pop(feed_id, None)
        if poller is None:
            raise UnknownFeedError(feed_id)

        stop = asyncio.create_task(poller.stop(), name=f"feedpoller:stop:{feed_id}")
        self._stopping.add(stop)
        stop.add_done_callback(self._stopping.discard)
        await asyncio.shield(stop)
        logger.info("Unregistered feed '%s'", feed_id)

    def subscribe(self) -> AsyncIterator[PollResult]:
        """Iterate over results until shutdown drains the channel."""
        return aiter(self._channel)

    async def shutdown(self) -> None:
        """Stop every feed, drain in-flight cycles, then close the channel.

        Idempotent. Concurrent callers all return once the channel is
        closed. Feeds still being unregistered are waited for too.
        """
        if self._shutdown_task is None:
            self._closed = True
            self._shutdown_task = asyncio.create_task(self._shutdown(), name="feedpoller:shutdown")
        await asyncio.shield(self._shutdown_task)

    async def _shutdown(self) -> None:
        pollers = list(self._pollers.values())
        self._pollers.clear()
        stops = [*(poller.stop() for poller in pollers), *self._stopping]
        if stops:
            await asyncio.gather(*stops)

        self._channel.close()
        logger.info("Scheduler shut down (%d feeds stopped)", len(pollers))


__all__ = ["PollScheduler"]
