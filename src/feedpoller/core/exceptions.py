"""Custom exceptions.

feedpoller uses a hierarchy of exceptions to separate per-cycle fetch
failures, which are reported inside ``PollResult.error``, from caller
misuse, which is raised immediately:

Example:
    >>> from feedpoller.core.exceptions import (
    ...     FeedPollerError, FetchError, HttpStatusError, UnknownFeedError,
    ... )
    >>> isinstance(HttpStatusError(500), FetchError)
    True
    >>> try:
    ...     raise UnknownFeedError("news")
    ... except FeedPollerError as e:
    ...     print(f"Caught: {type(e).__name__}")
    Caught: UnknownFeedError
"""

from __future__ import annotations


class FeedPollerError(Exception):
    """Base exception for feedpoller.

    Example:
        >>> from feedpoller.core.exceptions import FeedPollerError
        >>> e = FeedPollerError("something went wrong")
        >>> str(e)
        'something went wrong'
    """


class FetchError(FeedPollerError):
    """A single poll cycle failed.

    Fetch errors are retryable: the poller backs off and tries again.
    They never propagate out of a poller.

    Example:
        >>> from feedpoller.core.exceptions import FetchError
        >>> err = FetchError("boom", feed_id="news", url="https://example.com/rss")
        >>> err.feed_id
        'news'
    """

    def __init__(
        self,
        message: str,
        *,
        feed_id: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.feed_id = feed_id
        self.url = url


class TransportError(FetchError):
    """Network-level failure (timeout, DNS, connection refused).

    Example:
        >>> from feedpoller.core.exceptions import TransportError
        >>> raise TransportError("connection refused")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        TransportError: connection refused
    """


class HttpStatusError(FetchError):
    """The server answered with a non-success status.

    Example:
        >>> from feedpoller.core.exceptions import HttpStatusError
        >>> err = HttpStatusError(503)
        >>> err.status
        503
        >>> str(err)
        'HTTP 503'
    """

    def __init__(
        self,
        status: int,
        *,
        feed_id: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(f"HTTP {status}", feed_id=feed_id, url=url)
        self.status = status


class ParseError(FetchError):
    """The document is not well-formed RSS, RDF or Atom.

    Example:
        >>> from feedpoller.core.exceptions import ParseError
        >>> raise ParseError("not a feed")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ParseError: not a feed
    """


class DuplicateFeedError(FeedPollerError):
    """A feed with the same id is already registered."""

    def __init__(self, feed_id: str) -> None:
        super().__init__(f"Feed '{feed_id}' is already registered")
        self.feed_id = feed_id


class UnknownFeedError(FeedPollerError):
    """No active feed has the given id."""

    def __init__(self, feed_id: str) -> None:
        super().__init__(f"Feed '{feed_id}' is not registered")
        self.feed_id = feed_id


class EngineClosedError(FeedPollerError):
    """The scheduler was shut down and accepts no more feeds."""


class ChannelClosedError(FeedPollerError):
    """A result was published after the channel was closed."""


__all__ = [
    "ChannelClosedError",
    "DuplicateFeedError",
    "EngineClosedError",
    "FeedPollerError",
    "FetchError",
    "HttpStatusError",
    "ParseError",
    "TransportError",
    "UnknownFeedError",
]
