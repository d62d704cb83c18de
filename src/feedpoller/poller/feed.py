"""Single-feed polling loop.

A FeedPoller drives one feed's fetch -> parse -> diff -> emit cycle on its
own schedule. Failures stay inside the poller: they are reported through
``PollResult.error`` and only change this feed's backoff and status.

Example:
    >>> from feedpoller.poller.feed import FeedPoller
    >>> from feedpoller.models.feed import FeedConfig
    >>> from feedpoller.http.client import HttpFetcher
    >>> from feedpoller.parser.xml import parse_feed
    >>> results = []
    >>> poller = FeedPoller(
    ...     FeedConfig(feed_id="news", url="https://example.com/rss"),
    ...     fetcher=HttpFetcher(),
    ...     parser=parse_feed,
    ...     emit=results.append,
    ... )
    >>> poller.status.value
    'active'
    >>> # result = await poller.poll_once()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from feedpoller.core.config import Settings, get_settings
from feedpoller.core.exceptions import FetchError, HttpStatusError, ParseError, TransportError
from feedpoller.dedup.keys import item_key
from feedpoller.dedup.seen import SeenSet
from feedpoller.models.base import FeedStatus
from feedpoller.models.result import PollResult
from feedpoller.models.state import FeedPollerState
from feedpoller.parser.normalize import normalize_document
from feedpoller.poller.backoff import BackoffPolicy

if TYPE_CHECKING:
    from feedpoller.models.feed import FeedConfig
    from feedpoller.models.item import FeedItem, ParsedDocument
    from feedpoller.models.result import FetchResponse
    from feedpoller.protocols.fetch import Fetcher, Parser

logger = logging.getLogger(__name__)

EmitCallback = Callable[[PollResult], None]

HTTP_NOT_MODIFIED = 304


class FeedPoller:
    """Polls one feed until stopped.

    At most one cycle is in flight at a time. A cycle that overruns the
    interval delays the next one; cycles never overlap and are never
    skipped. Stopping is cooperative: a running cycle finishes and emits its
    result before the poller reports STOPPED.

    Args:
        config: The feed's registration.
        fetcher: Async fetch capability.
        parser: Document parse capability.
        emit: Called with exactly one PollResult per cycle.
        settings: Engine-wide defaults (timeout, capacity, backoff, headers).
    """

    def __init__(
        self,
        config: FeedConfig,
        *,
        fetcher: Fetcher,
        parser: Parser,
        emit: EmitCallback,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._config = config
        self._fetch = fetcher
        self._parse = parser
        self._emit = emit
        self._timeout_ms = config.fetch_timeout_ms or settings.fetch_timeout_ms
        self._default_headers = settings.default_headers
        self._failure_threshold = settings.failure_threshold
        self._backoff = BackoffPolicy(
            base_interval=config.poll_interval_ms / 1000,
            cap_multiplier=settings.backoff_cap_multiplier,
            jitter=settings.backoff_jitter,
        )
        self._state = FeedPollerState(
            config=config,
            seen_set=SeenSet(config.feed_id, capacity=settings.seen_capacity),
        )
        # Conditional GET validators from the last 2xx response
        self._validators: dict[str, str] = {}
        self._cycle_lock = asyncio.Lock()
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def feed_id(self) -> str:
        """The feed's identifier."""
        return self._config.feed_id

    @property
    def config(self) -> FeedConfig:
        """The feed's registration."""
        return self._config

    @property
    def state(self) -> FeedPollerState:
        """Runtime state (read-only by convention)."""
        return self._state

    @property
    def status(self) -> FeedStatus:
        """Current lifecycle status."""
        return self._state.status

    @property
    def backoff(self) -> BackoffPolicy:
        """Interval policy for this feed."""
        return self._backoff

    @property
    def is_running(self) -> bool:
        """True while the background loop is alive."""
        return self._task is not None and not self._task.done()

    def next_interval(self) -> float:
        """Seconds to wait before the next cycle, given the current state."""
        return self._backoff.interval(
            self._state.consecutive_failures,
            paused=self._state.status is FeedStatus.PAUSED,
        )

    def request_headers(self) -> dict[str, str]:
        """Headers for the next fetch.

        Defaults, then conditional GET validators, then the feed's own
        headers, later entries winning.
        """
        return {**self._default_headers, **self._validators, **self._config.headers}

    # --- Lifecycle ---

    def start(self, initial_delay: float = 0.0) -> asyncio.Task[None]:
        """Start the background polling loop.

        Args:
            initial_delay: Seconds to wait before the first cycle.

        Returns:
            The loop task.

        Raises:
            RuntimeError: If the poller was already started or stopped.
        """
        if self._task is not None or self._state.status is FeedStatus.STOPPED:
            raise RuntimeError(f"Poller for feed '{self.feed_id}' cannot be started twice")
        self._task = asyncio.create_task(self._run(initial_delay), name=f"feedpoller:{self.feed_id}")
        return self._task

    async def stop(self) -> None:
        """Stop polling.

        Signals the loop, waits for an in-flight cycle to finish, then marks
        the poller STOPPED and releases its seen set. Safe to call twice.
        """
        self._stop_event.set()
        task = self._task
        if task is not None and not task.done() and task is not asyncio.current_task():
            await asyncio.wait({task})

        async with self._cycle_lock:
            if self._state.status is not FeedStatus.STOPPED:
                self._state.status = FeedStatus.STOPPED
                self._state.next_poll_at = None
                self._state.seen_set.clear()
                logger.debug("Feed '%s' stopped after %d cycles", self.feed_id, self._state.cycles)

    async def _run(self, initial_delay: float) -> None:
        delay = initial_delay
        while not self._stop_event.is_set():
            self._state.next_poll_at = datetime.now(UTC) + timedelta(seconds=delay)
            if await self._wait_for_stop(delay):
                break
            self._state.next_poll_at = None
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Poll cycle for feed '%s' failed unexpectedly", self.feed_id)
            delay = self.next_interval()

    async def _wait_for_stop(self, delay: float) -> bool:
        """Sleep for ``delay`` seconds; return True if stopped meanwhile."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True

    # --- Cycle ---

    async def poll_once(self) -> PollResult:
        """Run one fetch -> parse -> diff -> emit cycle.

        Returns:
            The emitted PollResult.

        Raises:
            RuntimeError: If the poller is stopped.
        """
        async with self._cycle_lock:
            if self._state.status is FeedStatus.STOPPED:
                raise RuntimeError(f"Poller for feed '{self.feed_id}' is stopped")

            fetched_at = datetime.now(UTC)
            try:
                response = await self._fetch_response()
                if response.status == HTTP_NOT_MODIFIED:
                    result = self._on_success(fetched_at, [], not_modified=True)
                else:
                    document = self._parse_body(response.body)
                    new_items = self._diff(document, fetched_at)
                    self._remember_validators(response)
                    result = self._on_success(fetched_at, new_items)
            except FetchError as e:
                result = self._on_failure(fetched_at, e)

            self._emit(result)

            evicted = self._state.seen_set.evict_if_over_capacity()
            if evicted:
                logger.debug("Feed '%s': evicted %d seen keys", self.feed_id, evicted)
            return result

    async def _fetch_response(self) -> FetchResponse:
        url = self._config.url
        try:
            response = await self._fetch(url, self.request_headers(), self._timeout_ms)
        except FetchError:
            raise
        except Exception as e:
            raise TransportError(f"Fetch failed: {e}", feed_id=self.feed_id, url=url) from e

        if not response.ok and response.status != HTTP_NOT_MODIFIED:
            raise HttpStatusError(response.status, feed_id=self.feed_id, url=url)
        return response

    def _parse_body(self, body: bytes) -> ParsedDocument:
        try:
            return self._parse(body)
        except FetchError:
            raise
        except Exception as e:
            raise ParseError(f"Parser failed: {e}", feed_id=self.feed_id, url=self._config.url) from e

    def _diff(self, document: ParsedDocument, fetched_at: datetime) -> list[FeedItem]:
        """Return the unseen items among the leading ``max_items_per_fetch``."""
        items = normalize_document(document)[: self._config.max_items_per_fetch]
        seen = self._state.seen_set
        return [item for item in items if seen.record_and_check(item_key(item), fetched_at)]

    def _remember_validators(self, response: FetchResponse) -> None:
        validators: dict[str, str] = {}
        etag = response.header("ETag")
        if etag:
            validators["If-None-Match"] = etag
        last_modified = response.header("Last-Modified")
        if last_modified:
            validators["If-Modified-Since"] = last_modified
        self._validators = validators

    def _on_success(
        self,
        fetched_at: datetime,
        new_items: list[FeedItem],
        *,
        not_modified: bool = False,
    ) -> PollResult:
        state = self._state
        if state.consecutive_failures:
            logger.info(
                "Feed '%s' recovered after %d failed cycles",
                self.feed_id,
                state.consecutive_failures,
            )
        state.consecutive_failures = 0
        state.status = FeedStatus.ACTIVE
        state.last_error = None
        state.cycles += 1
        state.last_polled_at = fetched_at

        if new_items:
            logger.info("Feed '%s': %d new items", self.feed_id, len(new_items))
        else:
            logger.debug("Feed '%s': nothing new%s", self.feed_id, " (not modified)" if not_modified else "")

        return PollResult(
            feed_id=self.feed_id,
            fetched_at=fetched_at,
            new_items=tuple(new_items),
            not_modified=not_modified,
        )

    def _on_failure(self, fetched_at: datetime, error: FetchError) -> PollResult:
        if error.feed_id is None:
            error.feed_id = self.feed_id
        if error.url is None:
            error.url = self._config.url

        state = self._state
        state.consecutive_failures += 1
        state.last_error = error
        state.cycles += 1
        state.last_polled_at = fetched_at

        logger.warning(
            "Feed '%s' error (%d consecutive): %s",
            self.feed_id,
            state.consecutive_failures,
            error,
        )
        if state.status is FeedStatus.ACTIVE and state.consecutive_failures > self._failure_threshold:
            state.status = FeedStatus.PAUSED
            logger.warning(
                "Feed '%s' paused after %d failures; polling every %.1fs",
                self.feed_id,
                state.consecutive_failures,
                self._backoff.max_interval,
            )

        return PollResult(feed_id=self.feed_id, fetched_at=fetched_at, error=error)


__all__ = ["EmitCallback", "FeedPoller"]
