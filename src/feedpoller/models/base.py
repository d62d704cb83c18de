"""Base models and shared types.

Example:
    >>> from feedpoller.models.base import FeedStatus
    >>> FeedStatus.PAUSED.value
    'paused'
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class FeedStatus(str, Enum):
    """Lifecycle status of a feed's poller.

    ACTIVE and PAUSED both keep polling; PAUSED only signals that the feed
    has failed repeatedly and is polled at the capped backoff interval.

    Example:
        >>> list(FeedStatus)
        [<FeedStatus.ACTIVE: 'active'>, <FeedStatus.PAUSED: 'paused'>, <FeedStatus.STOPPED: 'stopped'>]
    """

    ACTIVE = "active"
    PAUSED = "paused"
    STOPPED = "stopped"  # Terminal


class FeedPollerModel(BaseModel):
    """Base model with standard configuration.

    Models are frozen: items and configs are never mutated after creation.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
        extra="forbid",
    )
