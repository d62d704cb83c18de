"""Console reporter for poll results.

Prints each PollResult the way a terminal user wants to read a feed: a
summary line followed by the leading new items.

Example:
    >>> import io
    >>> from rich.console import Console
    >>> from feedpoller.reporter.console import ConsoleReporter
    >>> from feedpoller.models import FeedItem, PollResult
    >>> out = io.StringIO()
    >>> reporter = ConsoleReporter(console=Console(file=out, width=120))
    >>> reporter.render(PollResult(feed_id="news", new_items=(FeedItem(title="Hi", link="https://a/1"),)))
    >>> "#1: Hi - https://a/1" in out.getvalue()
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from feedpoller.models.item import FeedItem
    from feedpoller.models.result import PollResult

NO_TITLE = "(no title)"
NO_LINK = "(no link)"


class ConsoleReporter:
    """Render PollResults to a rich Console.

    Args:
        console: Target console (default: stdout).
        max_items: New items listed per result (default 5).
        show_empty: Also print a line for cycles with nothing new.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        max_items: int = 5,
        show_empty: bool = True,
    ) -> None:
        self._console = console or Console()
        self._max_items = max_items
        self._show_empty = show_empty

    @property
    def console(self) -> Console:
        return self._console

    def render(self, result: PollResult) -> None:
        """Print one result."""
        timestamp = result.fetched_at.isoformat()
        if result.error is not None:
            self._console.print(
                f"Failed to fetch {result.feed_id} at {timestamp}: {result.error}",
                style="red",
                markup=False,
                highlight=False,
            )
            return

        if not result.new_items and not self._show_empty:
            return

        suffix = " (not modified)" if result.not_modified else ""
        self._console.print(
            f"Fetched {len(result.new_items)} new items for {result.feed_id} at {timestamp}{suffix}",
            style="bold",
            markup=False,
            highlight=False,
        )
        for index, item in enumerate(result.new_items[: self._max_items], start=1):
            self._console.print(self.format_item(index, item), markup=False, highlight=False)

    @staticmethod
    def format_item(index: int, item: FeedItem) -> str:
        """Format one item line.

        Example:
            >>> from feedpoller.models import FeedItem
            >>> ConsoleReporter.format_item(2, FeedItem())
            '#2: (no title) - (no link)'
        """
        return f"#{index}: {item.title or NO_TITLE} - {item.link or NO_LINK}"


__all__ = ["ConsoleReporter"]
