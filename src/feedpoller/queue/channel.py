"""Bounded multi-producer, single-consumer result channel.

Pollers publish without ever blocking; when the buffer is full the oldest
buffered result is dropped with a warning, trading completeness of the
event stream for liveness of polling.

Example:
    >>> import asyncio
    >>> from feedpoller.queue.channel import ResultChannel
    >>> from feedpoller.models.result import PollResult
    >>> async def example():
    ...     channel = ResultChannel(maxsize=10)
    ...     channel.publish(PollResult(feed_id="news"))
    ...     channel.close()
    ...     return [r.feed_id async for r in channel]
    >>> asyncio.run(example())
    ['news']
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import AsyncIterator

from feedpoller.core.exceptions import ChannelClosedError
from feedpoller.models.result import PollResult

logger = logging.getLogger(__name__)


class ResultChannel:
    """Unified output for every poller's results.

    Results from one producer keep their publish order. After ``close()``
    the consumer still receives everything buffered, then iteration ends.

    Args:
        maxsize: Results buffered before drop-oldest kicks in.
    """

    def __init__(self, maxsize: int = 1000) -> None:
        if maxsize < 1:
            raise ValueError(f"maxsize must be >= 1, got {maxsize}")
        self._maxsize = maxsize
        self._buffer: deque[PollResult] = deque()
        self._ready = asyncio.Event()
        self._closed = False
        self._dropped = 0

    @property
    def maxsize(self) -> int:
        return self._maxsize

    @property
    def closed(self) -> bool:
        """True once close() was called."""
        return self._closed

    @property
    def dropped(self) -> int:
        """Results discarded because the buffer was full."""
        return self._dropped

    def __len__(self) -> int:
        return len(self._buffer)

    def publish(self, result: PollResult) -> None:
        """Append a result without blocking.

        Raises:
            ChannelClosedError: If the channel is closed.
        """
        if self._closed:
            raise ChannelClosedError(f"Cannot publish result for '{result.feed_id}': channel closed")

        if len(self._buffer) >= self._maxsize:
            # Drop oldest message if full
            oldest = self._buffer.popleft()
            self._dropped += 1
            logger.warning(
                "Result channel full (%d); dropped result for feed '%s' from %s",
                self._maxsize,
                oldest.feed_id,
                oldest.fetched_at.isoformat(),
            )

        self._buffer.append(result)
        self._ready.set()

    async def get(self) -> PollResult | None:
        """Wait for the next result.

        Returns:
            The oldest buffered result, or None once the channel is closed
            and drained.
        """
        while not self._buffer:
            if self._closed:
                return None
            self._ready.clear()
            await self._ready.wait()
        return self._buffer.popleft()

    def close(self) -> None:
        """Stop accepting results and wake the consumer. Idempotent."""
        self._closed = True
        self._ready.set()

    async def __aiter__(self) -> AsyncIterator[PollResult]:
        while True:
            result = await self.get()
            if result is None:  # Shutdown signal
                break
            yield result


__all__ = ["ResultChannel"]
