"""CLI entry point."""

from __future__ import annotations

import asyncio
from typing import Optional
from urllib.parse import urlparse

import typer
from pydantic import ValidationError
from rich.console import Console

from feedpoller.core.config import Settings, get_settings
from feedpoller.core.engine import FeedPollEngine
from feedpoller.core.logging import configure_logging
from feedpoller.models.feed import FeedConfig
from feedpoller.reporter.console import ConsoleReporter

app = typer.Typer(
    name="feedpoller",
    help="Poll RSS and Atom feeds and print new items",
    no_args_is_help=True,
)
console = Console()

USAGE_EXAMPLE = 'RSS_URL="https://example.com/feed.xml" feedpoller watch'


@app.command()
def version() -> None:
    """Show version."""
    from feedpoller import __version__

    console.print(f"feedpoller {__version__}")


@app.command()
def watch(
    urls: Optional[list[str]] = typer.Argument(None, envvar="RSS_URL", help="Feed URLs to poll", show_default=False),
    interval_ms: Optional[int] = typer.Option(
        None,
        "--interval-ms",
        "-i",
        envvar="POLL_INTERVAL",
        min=1,
        help="Poll interval in milliseconds (default: FEEDPOLLER_DEFAULT_POLL_INTERVAL_MS or 60000)",
        show_default=False,
    ),
    max_items: Optional[int] = typer.Option(None, "--max-items", min=1, help="Leading items considered per poll"),
    show: int = typer.Option(5, "--show", min=0, help="New items printed per poll"),
    once: bool = typer.Option(False, "--once", help="Poll every feed once, then exit"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
) -> None:
    """Poll feeds on a timer and print new items as they appear."""
    if not urls:
        console.print("[red]Missing feed URL.[/red] Pass URLs or set RSS_URL, for example:")
        console.print(f"  {USAGE_EXAMPLE}", markup=False)
        raise typer.Exit(code=1)

    overrides: dict[str, object] = {}
    if log_level:
        overrides["log_level"] = log_level
    if once:
        overrides["stagger_start"] = False
    settings = get_settings(**overrides)
    configure_logging(settings.log_level, settings.log_format)
    interval_ms = interval_ms or settings.default_poll_interval_ms

    try:
        configs = _build_configs(urls, interval_ms, max_items or settings.max_items_per_fetch)
    except ValidationError as e:
        console.print(f"[red]Invalid feed configuration:[/red] {e.errors()[0]['msg']}")
        raise typer.Exit(code=1) from None

    console.print("Starting feed poller")
    for config in configs:
        console.print(f"Feed URL: {config.url}", markup=False)
    console.print(f"Poll interval: {interval_ms} ms")

    reporter = ConsoleReporter(console, max_items=show)
    try:
        asyncio.run(_watch(configs, settings, reporter, once=once))
    except KeyboardInterrupt:
        console.print("Stopped")


def _build_configs(urls: list[str], interval_ms: int, max_items: int) -> list[FeedConfig]:
    configs: list[FeedConfig] = []
    used: set[str] = set()
    for url in urls:
        feed_id = urlparse(url).netloc or url
        if feed_id in used:
            feed_id = f"{feed_id}#{len(configs) + 1}"
        used.add(feed_id)
        configs.append(
            FeedConfig(
                feed_id=feed_id,
                url=url,
                poll_interval_ms=interval_ms,
                max_items_per_fetch=max_items,
            )
        )
    return configs


async def _watch(
    configs: list[FeedConfig],
    settings: Settings,
    reporter: ConsoleReporter,
    *,
    once: bool,
) -> None:
    async with FeedPollEngine(settings=settings) as engine:
        for config in configs:
            await engine.register_feed(config)

        pending = {config.feed_id for config in configs}
        async for result in engine.events():
            reporter.render(result)
            if once:
                pending.discard(result.feed_id)
                if not pending:
                    break


if __name__ == "__main__":
    app()
