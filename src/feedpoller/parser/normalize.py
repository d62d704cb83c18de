"""RawItem -> FeedItem normalization.

This is the single place where RSS and Atom shapes are reconciled: link
elements become plain URLs, publication strings become datetimes, and
missing fields become empty strings.

Example:
    >>> from feedpoller.models.item import LinkRef, RawItem
    >>> from feedpoller.parser.normalize import normalize_item
    >>> item = normalize_item(RawItem(title="T", link=LinkRef(href="https://a/1")))
    >>> item.link
    'https://a/1'
"""

from __future__ import annotations

import contextlib
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from feedpoller.models.item import FeedItem, LinkRef, ParsedDocument, RawItem


def normalize_item(raw: RawItem) -> FeedItem:
    """Convert one raw item into a FeedItem."""
    return FeedItem(
        title=raw.title or "",
        link=_resolve_link(raw),
        published_at=parse_timestamp(raw.published),
        raw_guid=raw.guid or None,
    )


def normalize_document(document: ParsedDocument) -> list[FeedItem]:
    """Normalize every item of a document, preserving document order."""
    return [normalize_item(raw) for raw in document.items]


def _resolve_link(raw: RawItem) -> str:
    link = raw.link
    if isinstance(link, LinkRef):
        return link.href
    if link:
        return link
    if raw.links:
        return raw.links[0].href
    return ""


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an RFC 822 or ISO 8601 date.

    Naive results are assumed to be UTC. Unparseable input yields None.

    Example:
        >>> parse_timestamp("Thu, 01 Jan 2026 12:00:00 GMT").isoformat()
        '2026-01-01T12:00:00+00:00'
        >>> parse_timestamp("2026-01-01T12:00:00Z").isoformat()
        '2026-01-01T12:00:00+00:00'
        >>> parse_timestamp("yesterday") is None
        True
    """
    if not value:
        return None

    parsed: datetime | None = None
    with contextlib.suppress(ValueError, TypeError, IndexError):
        parsed = parsedate_to_datetime(value)
    if parsed is None:
        with contextlib.suppress(ValueError):
            # Parse ISO 8601 format
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


__all__ = ["normalize_document", "normalize_item", "parse_timestamp"]
