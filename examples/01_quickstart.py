#!/usr/bin/env python3
"""
feedpoller Quickstart Example

Shows the basic flow: register a feed, read results, see deduplication.

Usage:
    python examples/01_quickstart.py
"""

import asyncio

from feedpoller import FeedConfig, FeedPollEngine


async def main() -> None:
    """Poll one feed twice and print what is new each time."""

    async with FeedPollEngine() as engine:
        await engine.register_feed(FeedConfig(
            feed_id="hacker-news",
            url="https://news.ycombinator.com/rss",
            poll_interval_ms=30_000,
            max_items_per_fetch=10,
        ))

        cycles = 0
        async for result in engine.events():
            cycles += 1
            if result.error is not None:
                print(f"✗ {result.feed_id}: {result.error}")
            else:
                # Second cycle usually reports nothing new (deduped!)
                print(f"✓ Cycle {cycles}: {len(result.new_items)} new items")
                for item in result.new_items:
                    print(f"  - {item.title}")
            if cycles == 2:
                break


if __name__ == "__main__":
    asyncio.run(main())
