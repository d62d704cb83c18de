"""Default HTTP transport for feed fetching.

Wraps a pooled ``httpx.AsyncClient``. The poller owns retry and backoff, so
this client makes exactly one attempt per call and returns non-2xx statuses
instead of raising.

Example:
    >>> from feedpoller.http import HttpFetcher
    >>>
    >>> async with HttpFetcher() as fetch:
    ...     response = await fetch("https://example.com/feed.xml", {}, 10_000)
    ...     print(response.status)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from feedpoller.core.exceptions import TransportError
from feedpoller.models.result import FetchResponse

logger = logging.getLogger(__name__)


class HttpFetcher:
    """Async feed fetcher backed by httpx.

    Implements the ``Fetcher`` protocol.

    Attributes:
        follow_redirects: Whether redirects are followed.
    """

    def __init__(
        self,
        *,
        follow_redirects: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
        **client_kwargs: Any,
    ) -> None:
        """Initialize the fetcher.

        Args:
            follow_redirects: Follow 3xx redirects (default True).
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
            **client_kwargs: Extra ``httpx.AsyncClient`` arguments.
        """
        self.follow_redirects = follow_redirects
        self._transport = transport
        self._client_kwargs = client_kwargs
        self._client: httpx.AsyncClient | None = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                follow_redirects=self.follow_redirects,
                transport=self._transport,
                **self._client_kwargs,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        client, self._client = self._client, None
        if client is not None and not client.is_closed:
            await client.aclose()

    async def __aenter__(self) -> HttpFetcher:
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def __call__(
        self,
        url: str,
        headers: Mapping[str, str],
        timeout_ms: int,
    ) -> FetchResponse:
        """GET a URL once.

        Raises:
            TransportError: On timeouts and connection-level failures.
        """
        client = self._ensure_client()
        try:
            response = await client.get(
                url,
                headers=dict(headers),
                timeout=httpx.Timeout(timeout_ms / 1000),
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timeout: {e}", url=url) from e
        except httpx.TransportError as e:
            raise TransportError(f"Request failed: {e}", url=url) from e

        logger.debug("GET %s -> %d (%d bytes)", url, response.status_code, len(response.content))
        return FetchResponse(
            status=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )


__all__ = ["HttpFetcher"]
