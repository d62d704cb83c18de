"""Tests for feedpoller.parser.normalize - RawItem to FeedItem."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from feedpoller.models.item import LinkRef, RawItem
from feedpoller.parser.normalize import normalize_document, normalize_item, parse_timestamp
from feedpoller.parser.xml import parse_feed


class TestNormalizeItem:
    """Format quirks are resolved once."""

    def test_string_link(self) -> None:
        item = normalize_item(RawItem(title="T", link="https://a/1", guid="g"))
        assert item.link == "https://a/1"
        assert item.raw_guid == "g"

    def test_href_link(self) -> None:
        item = normalize_item(RawItem(title="T", link=LinkRef(href="https://a/1", rel="alternate")))
        assert item.link == "https://a/1"

    def test_falls_back_to_any_link(self) -> None:
        raw = RawItem(links=(LinkRef(href="https://a/enclosure", rel="enclosure"),))
        assert normalize_item(raw).link == "https://a/enclosure"

    def test_missing_fields(self) -> None:
        item = normalize_item(RawItem())
        assert item.title == ""
        assert item.link == ""
        assert item.published_at is None
        assert item.raw_guid is None

    def test_document_order(self, sample_atom_xml: bytes) -> None:
        items = normalize_document(parse_feed(sample_atom_xml))
        assert [i.title for i in items] == ["Atom Entry 1", "Atom Entry 2"]
        assert items[0].link == "https://example.com/entry-1"

    def test_rss_and_atom_normalize_alike(self, sample_rss_xml: bytes, sample_atom_xml: bytes) -> None:
        rss = normalize_document(parse_feed(sample_rss_xml))[0]
        atom = normalize_document(parse_feed(sample_atom_xml))[0]
        assert type(rss) is type(atom)
        assert isinstance(rss.link, str) and isinstance(atom.link, str)


class TestParseTimestamp:
    """Date parsing."""

    def test_rfc822(self) -> None:
        assert parse_timestamp("Fri, 13 Feb 2026 10:00:00 GMT") == datetime(2026, 2, 13, 10, tzinfo=UTC)

    def test_iso8601_zulu(self) -> None:
        assert parse_timestamp("2026-02-13T10:00:00Z") == datetime(2026, 2, 13, 10, tzinfo=UTC)

    def test_iso8601_offset(self) -> None:
        parsed = parse_timestamp("2026-02-12T10:00:00+01:00")
        assert parsed is not None
        assert parsed.utcoffset() == timedelta(hours=1)
        assert parsed == datetime(2026, 2, 12, 9, tzinfo=timezone.utc)

    def test_naive_assumed_utc(self) -> None:
        assert parse_timestamp("2026-02-13T10:00:00") == datetime(2026, 2, 13, 10, tzinfo=UTC)

    def test_garbage(self) -> None:
        assert parse_timestamp("sometime last week") is None
        assert parse_timestamp("") is None
        assert parse_timestamp(None) is None
