"""Protocols for injected collaborators."""

from feedpoller.protocols.fetch import Fetcher, Parser

__all__ = ["Fetcher", "Parser"]
