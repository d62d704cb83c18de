"""Feed item models.

Parsers produce ``RawItem`` objects that still carry format quirks (an Atom
link is an href-bearing element, an RSS link is text). ``FeedItem`` is the
normalized form every downstream component works with.

Example:
    >>> from feedpoller.models.item import FeedItem
    >>> item = FeedItem(title="  Hello ", link="https://example.com/1", raw_guid="a")
    >>> item.title
    'Hello'
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from feedpoller.models.base import FeedPollerModel


class FeedFormat(str, Enum):
    """Document shape a parser recognized."""

    RSS = "rss"  # rss/channel/item
    RDF = "rdf"  # RSS 1.0, rdf:RDF/item
    ATOM = "atom"  # feed/entry


class LinkRef(FeedPollerModel):
    """An href-bearing link element (Atom ``<link href=... rel=...>``)."""

    href: str
    rel: str | None = None
    type: str | None = None


class RawItem(FeedPollerModel):
    """One item or entry as found in the document, before normalization."""

    title: str | None = None
    link: str | LinkRef | None = None
    links: tuple[LinkRef, ...] = ()
    guid: str | None = None
    published: str | None = None


class ParsedDocument(FeedPollerModel):
    """Parser output: the document format plus its items in document order.

    Example:
        >>> from feedpoller.models.item import FeedFormat, ParsedDocument, RawItem
        >>> doc = ParsedDocument(format=FeedFormat.ATOM, items=(RawItem(guid="x"),))
        >>> len(doc.feed_entries), len(doc.channel_items)
        (1, 0)
    """

    format: FeedFormat
    title: str | None = None
    items: tuple[RawItem, ...] = ()

    @property
    def channel_items(self) -> tuple[RawItem, ...]:
        """Items of an RSS or RDF document."""
        return self.items if self.format is not FeedFormat.ATOM else ()

    @property
    def feed_entries(self) -> tuple[RawItem, ...]:
        """Entries of an Atom document."""
        return self.items if self.format is FeedFormat.ATOM else ()


class FeedItem(FeedPollerModel):
    """Normalized feed item.

    Produced fresh every cycle and never mutated.
    """

    title: str = Field(default="", description="Item title, empty when missing")
    link: str = Field(default="", description="Item URL, empty when missing")
    published_at: datetime | None = Field(default=None, description="Publication time if parseable")
    raw_guid: str | None = Field(default=None, description="guid (RSS) or id (Atom) as published")
