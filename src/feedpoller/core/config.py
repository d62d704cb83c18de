"""feedpoller configuration.

Application settings loaded from environment variables with FEEDPOLLER_ prefix.
Values here are engine-wide defaults; a ``FeedConfig`` can override the
interval, item limit and timeout per feed.

Example:
    >>> from feedpoller.core.config import get_settings
    >>> settings = get_settings(log_level="DEBUG")
    >>> settings.log_level
    'DEBUG'
    >>> settings.seen_capacity
    500
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ACCEPT = "application/rss+xml, application/atom+xml, application/xml;q=0.9, */*;q=0.8"


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with FEEDPOLLER_ prefix.

    Example:
        >>> from feedpoller.core.config import Settings
        >>> s = Settings(failure_threshold=3)
        >>> s.failure_threshold
        3
        >>> s.backoff_cap_multiplier
        10.0
    """

    model_config = SettingsConfigDict(
        env_prefix="FEEDPOLLER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Polling
    default_poll_interval_ms: int = Field(default=60_000, gt=0, description="Poll interval for new feeds")
    fetch_timeout_ms: int = Field(default=10_000, gt=0, description="Per-request fetch timeout")
    max_items_per_fetch: int = Field(default=50, ge=1, description="Items considered per cycle")
    stagger_start: bool = Field(default=True, description="Randomly delay each feed's first poll")

    # Deduplication
    seen_capacity: int = Field(default=500, ge=1, description="Seen keys kept per feed")

    # Failure handling
    failure_threshold: int = Field(default=5, ge=0, description="Failures before a feed is Paused")
    backoff_cap_multiplier: float = Field(default=10.0, ge=1.0, description="Backoff cap as a multiple of the interval")
    backoff_jitter: float = Field(default=0.0, ge=0.0, le=1.0, description="Random jitter fraction on backoff")

    # Output
    channel_size: int = Field(default=1000, ge=1, description="Buffered results before drop-oldest")

    # HTTP
    user_agent: str = Field(default="feedpoller/1.0", description="User-Agent header")
    accept: str = Field(default=DEFAULT_ACCEPT, description="Accept header")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["console", "plain"] = Field(default="console", description="Log format: console or plain")

    @property
    def default_headers(self) -> dict[str, str]:
        """Headers sent with every fetch unless a feed overrides them."""
        return {"User-Agent": self.user_agent, "Accept": self.accept}


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from feedpoller.core.config import get_settings
        >>> s = get_settings(channel_size=10)
        >>> s.channel_size
        10
    """
    return Settings(**overrides)
