"""Fetch and parse protocols.

The polling core depends only on these two capabilities. Any async callable
with the ``Fetcher`` signature can replace the default httpx transport, and
any callable with the ``Parser`` signature can replace the ElementTree
parser.

Example:
    >>> from feedpoller.protocols.fetch import Fetcher, Parser
    >>> from feedpoller.parser.xml import parse_feed
    >>> isinstance(parse_feed, Parser)
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from feedpoller.models.item import ParsedDocument
    from feedpoller.models.result import FetchResponse


@runtime_checkable
class Fetcher(Protocol):
    """Retrieve a feed document over the network."""

    async def __call__(
        self,
        url: str,
        headers: Mapping[str, str],
        timeout_ms: int,
    ) -> FetchResponse:
        """Fetch a URL.

        Args:
            url: Document URL.
            headers: Request headers.
            timeout_ms: Whole-request timeout in milliseconds.

        Returns:
            Status, body and response headers. Non-2xx statuses are returned,
            not raised.

        Raises:
            TransportError: On timeouts, DNS failures, refused connections.
        """
        ...


@runtime_checkable
class Parser(Protocol):
    """Turn a document body into raw items."""

    def __call__(self, body: bytes) -> ParsedDocument:
        """Parse a document.

        Args:
            body: Raw response body.

        Returns:
            The document format and its items in document order.

        Raises:
            ParseError: If the body is not RSS, RDF or Atom.
        """
        ...
