"""Tests for feedpoller.core.engine - end-to-end through the public API."""

from __future__ import annotations

import asyncio

import pytest

from feedpoller import FeedConfig, FeedPollEngine
from feedpoller.core.exceptions import EngineClosedError, UnknownFeedError
from feedpoller.http.client import HttpFetcher
from feedpoller.models.base import FeedStatus

URL = "https://example.com/feed.xml"


async def take(events, count: int, timeout: float = 2.0) -> list:
    results = []

    async def _read() -> None:
        async for result in events:
            results.append(result)
            if len(results) == count:
                return

    await asyncio.wait_for(_read(), timeout=timeout)
    return results


class TestFeedPollEngine:
    """Public engine behavior."""

    async def test_first_poll_then_nothing_new(self, fake_fetcher, settings, build_rss, ok_response) -> None:
        """Items a, b, c with a limit of 2: first [a, b], then []."""
        fake_fetcher.add(URL, ok_response(build_rss("a", "b", "c")))

        async with FeedPollEngine(fake_fetcher, settings=settings) as engine:
            await engine.register_feed(
                FeedConfig(feed_id="F1", url=URL, poll_interval_ms=50, max_items_per_fetch=2)
            )
            events = engine.events()
            first, second = await take(events, 2)

        assert first.feed_id == "F1"
        assert [i.raw_guid for i in first.new_items] == ["a", "b"]
        assert [i.title for i in first.new_items] == ["Item a", "Item b"]
        assert second.ok
        assert second.new_items == ()
        assert second.fetched_at >= first.fetched_at

    async def test_feeds_and_state(self, fake_fetcher, settings, build_rss, ok_response) -> None:
        fake_fetcher.add(URL, ok_response(build_rss("a")))
        engine = FeedPollEngine(fake_fetcher, settings=settings)

        await engine.register_feed(FeedConfig(feed_id="F1", url=URL))
        await take(engine.events(), 1)

        assert engine.feeds() == ["F1"]
        state = engine.state("F1")
        assert state.status is FeedStatus.ACTIVE
        assert state.cycles == 1
        assert state.seen_set.contains("a")

        await engine.unregister_feed("F1")
        assert engine.feeds() == []
        with pytest.raises(UnknownFeedError):
            engine.state("F1")
        await engine.shutdown()

    async def test_events_end_after_shutdown(self, fake_fetcher, settings, build_rss, ok_response) -> None:
        fake_fetcher.add(URL, ok_response(build_rss("a")))
        engine = FeedPollEngine(fake_fetcher, settings=settings)
        await engine.register_feed(FeedConfig(feed_id="F1", url=URL))

        async def consume() -> list:
            return [result async for result in engine.events()]

        consumer = asyncio.create_task(consume())
        await asyncio.sleep(0.05)
        await engine.shutdown()
        received = await asyncio.wait_for(consumer, timeout=1.0)

        assert len(received) == 1
        with pytest.raises(EngineClosedError):
            await engine.register_feed(FeedConfig(feed_id="F2", url=URL))

    async def test_owns_default_fetcher(self, settings) -> None:
        engine = FeedPollEngine(settings=settings)
        assert isinstance(engine.scheduler._fetcher, HttpFetcher)
        await engine.shutdown()
        await engine.shutdown()

    async def test_context_exit_overlapping_shutdown(self, settings, build_rss) -> None:
        """An explicit shutdown racing the context exit waits for the drain too."""
        from feedpoller.models.result import FetchResponse

        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_fetcher(url, headers, timeout_ms):
            started.set()
            await release.wait()
            return FetchResponse(status=200, body=build_rss("a"))

        async with FeedPollEngine(slow_fetcher, settings=settings) as engine:
            await engine.register_feed(FeedConfig(feed_id="F1", url=URL))
            await started.wait()
            explicit = asyncio.create_task(engine.shutdown())
            await asyncio.sleep(0.01)
            assert not explicit.done()
            asyncio.get_running_loop().call_later(0.01, release.set)

        await explicit
        assert engine.scheduler.channel.closed
        results = [result async for result in engine.events()]
        assert [r.feed_id for r in results] == ["F1"]
