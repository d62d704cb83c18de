#!/usr/bin/env python3
"""
feedpoller Multi-Feed Example

Demonstrates polling several feeds on independent schedules through one
event stream, with console output and logging configured like the CLI.

Usage:
    python examples/02_multi_feed.py
"""

import asyncio

from feedpoller import ConsoleReporter, FeedConfig, FeedPollEngine, get_settings
from feedpoller.core.logging import configure_logging


async def main() -> None:
    """Watch two feeds for one minute."""

    settings = get_settings(log_level="INFO", failure_threshold=3)
    configure_logging(settings.log_level, settings.log_format)
    reporter = ConsoleReporter(max_items=3, show_empty=False)

    # Each feed keeps its own interval, dedup memory and backoff
    feeds = [
        FeedConfig(feed_id="hacker-news", url="https://news.ycombinator.com/rss", poll_interval_ms=20_000),
        FeedConfig(feed_id="lobsters", url="https://lobste.rs/rss", poll_interval_ms=45_000),
    ]

    async with FeedPollEngine(settings=settings) as engine:
        for feed in feeds:
            await engine.register_feed(feed)
            print(f"Registered: {feed.feed_id}")

        async def consume() -> None:
            async for result in engine.events():
                reporter.render(result)

        consumer = asyncio.create_task(consume())
        await asyncio.sleep(60)

        for feed_id in engine.feeds():
            state = engine.state(feed_id)
            print(f"{feed_id}: {state.cycles} cycles, status {state.status.value}")

    # Shutdown closed the stream, so the consumer finishes on its own
    await consumer


if __name__ == "__main__":
    asyncio.run(main())
