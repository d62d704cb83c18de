"""RSS/Atom document parser.

Parses RSS 2.0, RSS 1.0 (RDF) and Atom documents with ElementTree and
returns their items as ``RawItem`` objects in document order. No
normalization happens here: an Atom link stays an href-bearing ``LinkRef``.

Example:
    >>> from feedpoller.parser.xml import parse_feed
    >>> doc = parse_feed(b"<rss><channel><item><guid>a</guid></item></channel></rss>")
    >>> doc.format.value, doc.items[0].guid
    ('rss', 'a')
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from feedpoller.core.exceptions import ParseError
from feedpoller.models.item import FeedFormat, LinkRef, ParsedDocument, RawItem

ATOM_NS = "http://www.w3.org/2005/Atom"
RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RSS1_NS = "http://purl.org/rss/1.0/"
DC_NS = "http://purl.org/dc/elements/1.1/"


def parse_feed(body: bytes) -> ParsedDocument:
    """Parse a feed document.

    Implements the ``Parser`` protocol.

    Args:
        body: Raw document bytes; the XML declaration decides the encoding.

    Returns:
        ParsedDocument with the detected format and raw items.

    Raises:
        ParseError: If the body is not well-formed XML or not a feed.
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise ParseError(f"Failed to parse feed XML: {e}") from e

    tag = _local_name(root.tag)
    if tag == "rss":
        return _parse_rss(root)
    if tag == "feed":
        return _parse_atom(root)
    if tag == "RDF":
        return _parse_rdf(root)
    raise ParseError(f"Document is not an RSS or Atom feed (root element <{tag}>)")


def _local_name(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix."""
    return tag.rsplit("}", 1)[-1]


def _text(elem: ET.Element | None) -> str | None:
    if elem is None:
        return None
    text = "".join(elem.itertext()).strip()
    return text or None


def _find(parent: ET.Element, tag: str, *namespaces: str) -> ET.Element | None:
    """Find a child by local name, trying each namespace then none."""
    for ns in namespaces:
        elem = parent.find(f"{{{ns}}}{tag}")
        if elem is not None:
            return elem
    return parent.find(tag)


def _parse_rss(root: ET.Element) -> ParsedDocument:
    channel = root.find("channel")
    if channel is None:
        raise ParseError("RSS document has no <channel>")
    items = tuple(_parse_rss_item(item) for item in channel.findall("item"))
    return ParsedDocument(format=FeedFormat.RSS, title=_text(channel.find("title")), items=items)


def _parse_rss_item(item: ET.Element) -> RawItem:
    published = _text(item.find("pubDate")) or _text(item.find(f"{{{DC_NS}}}date"))
    link = _text(item.find("link"))
    if link is None:
        # Some feeds only carry an Atom link inside RSS items
        atom_link = item.find(f"{{{ATOM_NS}}}link")
        if atom_link is not None and atom_link.get("href"):
            return RawItem(
                title=_text(item.find("title")),
                link=_link_ref(atom_link),
                guid=_text(item.find("guid")),
                published=published,
            )
    return RawItem(
        title=_text(item.find("title")),
        link=link,
        guid=_text(item.find("guid")),
        published=published,
    )


def _parse_rdf(root: ET.Element) -> ParsedDocument:
    # RDF items are siblings of the channel, not children
    items = tuple(
        RawItem(
            title=_text(_find(item, "title", RSS1_NS)),
            link=_text(_find(item, "link", RSS1_NS)),
            guid=item.get(f"{{{RDF_NS}}}about"),
            published=_text(item.find(f"{{{DC_NS}}}date")),
        )
        for item in (root.findall(f"{{{RSS1_NS}}}item") or root.findall("item"))
    )
    channel = _find(root, "channel", RSS1_NS)
    title = _text(_find(channel, "title", RSS1_NS)) if channel is not None else None
    return ParsedDocument(format=FeedFormat.RDF, title=title, items=items)


def _parse_atom(root: ET.Element) -> ParsedDocument:
    # Handle both namespaced and non-namespaced Atom
    entries = root.findall(f"{{{ATOM_NS}}}entry") or root.findall("entry")
    items = tuple(_parse_atom_entry(entry) for entry in entries)
    return ParsedDocument(
        format=FeedFormat.ATOM,
        title=_text(_find(root, "title", ATOM_NS)),
        items=items,
    )


def _parse_atom_entry(entry: ET.Element) -> RawItem:
    links = tuple(
        _link_ref(elem)
        for elem in (entry.findall(f"{{{ATOM_NS}}}link") or entry.findall("link"))
        if elem.get("href")
    )
    published = _text(_find(entry, "published", ATOM_NS)) or _text(_find(entry, "updated", ATOM_NS))
    return RawItem(
        title=_text(_find(entry, "title", ATOM_NS)),
        link=_preferred_link(links),
        links=links,
        guid=_text(_find(entry, "id", ATOM_NS)),
        published=published,
    )


def _link_ref(elem: ET.Element) -> LinkRef:
    return LinkRef(href=elem.get("href", ""), rel=elem.get("rel"), type=elem.get("type"))


def _preferred_link(links: tuple[LinkRef, ...]) -> LinkRef | None:
    """Pick the alternate link (rel missing or "alternate"), else the first."""
    for link in links:
        if link.rel in (None, "alternate"):
            return link
    return links[0] if links else None


__all__ = ["parse_feed", "ATOM_NS"]
