"""Item key generation.

Every feed item gets a stable key used to decide whether it was already
seen. A publisher-supplied guid wins; without one the key is a fixed-width
hash of the item's link and title.

Example:
    >>> from feedpoller.dedup.keys import item_key
    >>> from feedpoller.models.item import FeedItem
    >>> item_key(FeedItem(title="Hello", link="https://example.com/1", raw_guid=" post-1 "))
    'post-1'
    >>> item_key(FeedItem(title="Hello", link="https://example.com/1")).startswith("lt_")
    True
"""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from feedpoller.models.item import FeedItem

LINK_TITLE_PREFIX = "lt"
HASH_LENGTH = 32


def item_key(item: FeedItem) -> str:
    """Derive the dedup key for a feed item.

    Pure and deterministic: identical input always yields the identical key.
    Two distinct items sharing both link and title collide, which is an
    accepted approximation for guid-less feeds.

    Args:
        item: Normalized feed item.

    Returns:
        The trimmed guid when present, otherwise ``lt_<32 hex chars>``.
    """
    if item.raw_guid is not None:
        guid = item.raw_guid.strip()
        if guid:
            return guid
    return generate_link_title_key(item.link, item.title)


def generate_link_title_key(
    link: str,
    title: str,
    *,
    prefix: str = LINK_TITLE_PREFIX,
    hash_length: int = HASH_LENGTH,
) -> str:
    """Hash a (link, title) pair into a fixed-width key.

    Values are trimmed but keep their case, so titles differing only in
    capitalization produce different keys.

    Example:
        >>> generate_link_title_key(" https://a/1 ", "T") == generate_link_title_key("https://a/1", "T ")
        True
        >>> generate_link_title_key("https://a/1", "T") == generate_link_title_key("https://a/1", "t")
        False
    """
    serialized = json.dumps([link.strip(), title.strip()], ensure_ascii=True)
    hash_digest = hashlib.sha256(serialized.encode("utf-8")).hexdigest()
    return f"{prefix}_{hash_digest[:hash_length]}"


__all__ = ["item_key", "generate_link_title_key"]
