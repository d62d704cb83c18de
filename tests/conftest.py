"""Shared test fixtures for feedpoller tests."""

from __future__ import annotations

from collections.abc import Mapping

import pytest

from feedpoller.core.config import Settings
from feedpoller.models.result import FetchResponse

SAMPLE_RSS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Test Feed</title>
    <link>https://example.com</link>
    <description>A test RSS feed</description>
    <item>
      <title>First Article</title>
      <link>https://example.com/article-1</link>
      <guid>article-1</guid>
      <pubDate>Fri, 13 Feb 2026 10:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Second Article</title>
      <link>https://example.com/article-2</link>
      <guid>article-2</guid>
      <pubDate>Fri, 13 Feb 2026 09:00:00 GMT</pubDate>
    </item>
  </channel>
</rss>"""

SAMPLE_ATOM_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Test Atom Feed</title>
  <link href="https://example.com"/>
  <entry>
    <title>Atom Entry 1</title>
    <link rel="self" href="https://example.com/entry-1.atom"/>
    <link rel="alternate" href="https://example.com/entry-1"/>
    <id>urn:uuid:entry-1</id>
    <updated>2026-02-13T10:00:00Z</updated>
  </entry>
  <entry>
    <title>Atom Entry 2</title>
    <link href="https://example.com/entry-2"/>
    <id>urn:uuid:entry-2</id>
    <published>2026-02-12T10:00:00+01:00</published>
  </entry>
</feed>"""

SAMPLE_RDF_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns="http://purl.org/rss/1.0/"
         xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel rdf:about="https://example.com/">
    <title>RDF Feed</title>
  </channel>
  <item rdf:about="https://example.com/rdf-1">
    <title>RDF Item</title>
    <link>https://example.com/rdf-1</link>
    <dc:date>2026-02-13T10:00:00Z</dc:date>
  </item>
</rdf:RDF>"""

SAMPLE_MALFORMED_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Malformed Feed</title>
    <item>
      <title>Bad Item</title>
"""

SAMPLE_NOT_A_FEED_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<html>
  <body>This is not a feed</body>
</html>"""


def rss_document(*guids: str) -> bytes:
    """Build an RSS document whose items carry the given guids, in order."""
    items = "".join(
        f"<item><title>Item {guid}</title><link>https://example.com/{guid}</link>"
        f"<guid>{guid}</guid></item>"
        for guid in guids
    )
    return f'<rss version="2.0"><channel><title>T</title>{items}</channel></rss>'.encode()


class FakeFetcher:
    """Scripted Fetcher.

    Each URL has a list of responses (FetchResponse or exception instances)
    consumed in order; the last one repeats forever.
    """

    def __init__(self, routes: Mapping[str, list[object]] | None = None) -> None:
        self.routes: dict[str, list[object]] = {url: list(r) for url, r in (routes or {}).items()}
        self.calls: list[tuple[str, dict[str, str], int]] = []

    def add(self, url: str, *responses: object) -> None:
        self.routes.setdefault(url, []).extend(responses)

    async def __call__(self, url: str, headers: Mapping[str, str], timeout_ms: int) -> FetchResponse:
        self.calls.append((url, dict(headers), timeout_ms))
        queue = self.routes[url]
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, BaseException):
            raise response
        return response  # type: ignore[return-value]

    def calls_for(self, url: str) -> int:
        return sum(1 for call in self.calls if call[0] == url)


def ok(body: bytes, **headers: str) -> FetchResponse:
    return FetchResponse(status=200, body=body, headers=headers)


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    """Empty scripted fetcher."""
    return FakeFetcher()


@pytest.fixture
def settings() -> Settings:
    """Deterministic settings: no stagger, no jitter."""
    return Settings(stagger_start=False, backoff_jitter=0.0, failure_threshold=5)


@pytest.fixture
def build_rss():
    """RSS document builder: build_rss("a", "b") -> bytes."""
    return rss_document


@pytest.fixture
def ok_response():
    """200 response builder: ok_response(body, **headers)."""
    return ok


@pytest.fixture
def sample_rss_xml() -> bytes:
    """Sample valid RSS 2.0 XML."""
    return SAMPLE_RSS_XML


@pytest.fixture
def sample_atom_xml() -> bytes:
    """Sample valid Atom XML."""
    return SAMPLE_ATOM_XML


@pytest.fixture
def sample_rdf_xml() -> bytes:
    """Sample valid RSS 1.0 (RDF) XML."""
    return SAMPLE_RDF_XML


@pytest.fixture
def sample_malformed_xml() -> bytes:
    """Sample malformed RSS XML."""
    return SAMPLE_MALFORMED_XML


@pytest.fixture
def sample_not_a_feed_xml() -> bytes:
    """Sample XML that is not a feed."""
    return SAMPLE_NOT_A_FEED_XML
