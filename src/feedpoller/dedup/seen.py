"""Bounded per-feed store of observed item keys.

Example:
    >>> from datetime import UTC, datetime
    >>> from feedpoller.dedup.seen import SeenSet
    >>> seen = SeenSet("news", capacity=2)
    >>> now = datetime.now(UTC)
    >>> seen.record_and_check("a", now), seen.record_and_check("a", now)
    (True, False)
"""

from __future__ import annotations

import heapq
from datetime import datetime
from itertools import count
from threading import Lock

from feedpoller.models.sighting import SeenRecord

DEFAULT_CAPACITY = 500


class SeenSet:
    """Keys already observed for one feed, with oldest-first eviction.

    Memory is bounded: once more than ``capacity`` keys are stored,
    ``evict_if_over_capacity`` drops the records with the oldest
    ``first_seen_at``. Records seen at the same instant are evicted in
    insertion order. All keys of one cycle share its fetch time, so when
    the capacity is below one cycle's item count the top-of-document
    (newest) items of that cycle are evicted first.

    All operations hold an internal lock, so a check and its insert are
    atomic with respect to eviction or ``clear``.

    Args:
        feed_id: Feed the keys belong to.
        capacity: Keys retained after eviction (default 500).
    """

    def __init__(self, feed_id: str, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.feed_id = feed_id
        self._capacity = capacity
        self._records: dict[str, tuple[int, SeenRecord]] = {}
        self._sequence = count()
        self._lock = Lock()

    @property
    def capacity(self) -> int:
        """Maximum keys kept after eviction."""
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def contains(self, key: str) -> bool:
        """Return True if the key was observed and not evicted."""
        with self._lock:
            return key in self._records

    def get(self, key: str) -> SeenRecord | None:
        """Return the record for a key, if present."""
        with self._lock:
            entry = self._records.get(key)
        return entry[1] if entry is not None else None

    def record_and_check(self, key: str, observed_at: datetime) -> bool:
        """Insert the key if absent.

        Args:
            key: Item key.
            observed_at: Observation time, stored as ``first_seen_at``.

        Returns:
            True if the key was newly inserted (the item is new), False if
            it was already present.
        """
        with self._lock:
            if key in self._records:
                return False
            record = SeenRecord(feed_id=self.feed_id, key=key, first_seen_at=observed_at)
            self._records[key] = (next(self._sequence), record)
            return True

    def evict_if_over_capacity(self) -> int:
        """Drop the oldest records until the set fits its capacity.

        Returns:
            Number of records evicted.
        """
        with self._lock:
            excess = len(self._records) - self._capacity
            if excess <= 0:
                return 0
            oldest = heapq.nsmallest(
                excess,
                self._records.items(),
                key=lambda kv: (kv[1][1].first_seen_at, kv[1][0]),
            )
            for key, _ in oldest:
                del self._records[key]
            return excess

    def clear(self) -> None:
        """Release every record."""
        with self._lock:
            self._records.clear()

    def __repr__(self) -> str:
        return f"SeenSet(feed_id={self.feed_id!r}, size={len(self)}, capacity={self._capacity})"


__all__ = ["DEFAULT_CAPACITY", "SeenSet"]
