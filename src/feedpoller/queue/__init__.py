"""Result channel."""

from feedpoller.queue.channel import ResultChannel

__all__ = ["ResultChannel"]
