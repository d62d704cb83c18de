"""Deduplication: item keys and per-feed seen sets."""

from feedpoller.dedup.keys import generate_link_title_key, item_key
from feedpoller.dedup.seen import SeenSet

__all__ = ["SeenSet", "generate_link_title_key", "item_key"]
