"""HTTP transport."""

from feedpoller.http.client import HttpFetcher

__all__ = ["HttpFetcher"]
