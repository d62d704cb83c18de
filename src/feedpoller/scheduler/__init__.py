"""Multi-feed scheduling.

Example:
    >>> from feedpoller.scheduler import PollScheduler
    >>> from feedpoller.http import HttpFetcher
    >>> from feedpoller.parser import parse_feed
    >>>
    >>> scheduler = PollScheduler(fetcher=HttpFetcher(), parser=parse_feed)
    >>> # await scheduler.register_feed(config)
"""

from feedpoller.scheduler.poll import PollScheduler

__all__ = ["PollScheduler"]
