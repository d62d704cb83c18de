"""Tests for feedpoller.models."""

from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from feedpoller.core.exceptions import TransportError
from feedpoller.dedup.seen import SeenSet
from feedpoller.models import FeedConfig, FeedItem, FeedPollerState, FetchResponse, PollResult
from feedpoller.models.base import FeedStatus


class TestFeedConfig:
    """Feed registration validation."""

    def test_defaults(self) -> None:
        config = FeedConfig(feed_id="F1", url="https://example.com/rss")
        assert config.poll_interval_ms == 60_000
        assert config.max_items_per_fetch == 50
        assert config.fetch_timeout_ms is None
        assert config.headers == {}
        assert config.poll_interval == timedelta(minutes=1)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"feed_id": ""},
            {"url": "ftp://example.com/rss"},
            {"url": "not a url"},
            {"poll_interval_ms": 0},
            {"max_items_per_fetch": 0},
            {"fetch_timeout_ms": -1},
            {"unexpected": True},
        ],
    )
    def test_rejects_invalid(self, overrides: dict) -> None:
        fields = {"feed_id": "F1", "url": "https://example.com/rss", **overrides}
        with pytest.raises(ValidationError):
            FeedConfig(**fields)

    def test_frozen(self) -> None:
        config = FeedConfig(feed_id="F1", url="https://example.com/rss")
        with pytest.raises(ValidationError):
            config.poll_interval_ms = 5


class TestFeedItem:
    def test_defaults_and_stripping(self) -> None:
        item = FeedItem(title="  Hello ", link=" https://a/1 ")
        assert item.title == "Hello"
        assert item.link == "https://a/1"
        assert item.published_at is None
        assert item.raw_guid is None


class TestResults:
    def test_fetch_response_ok(self) -> None:
        assert FetchResponse(status=204).ok
        assert not FetchResponse(status=304).ok
        assert FetchResponse(status=200, headers={"Last-Modified": "x"}).header("last-modified") == "x"
        assert FetchResponse(status=200).header("ETag") is None

    def test_poll_result_error(self) -> None:
        result = PollResult(feed_id="F1", error=TransportError("down"))
        assert not result.ok
        assert result.new_items == ()
        assert result.fetched_at.tzinfo is not None


class TestFeedPollerState:
    def test_initial_state(self) -> None:
        config = FeedConfig(feed_id="F1", url="https://example.com/rss")
        state = FeedPollerState(config=config, seen_set=SeenSet("F1"))

        assert state.feed_id == "F1"
        assert state.status is FeedStatus.ACTIVE
        assert state.consecutive_failures == 0
        assert state.last_error is None
