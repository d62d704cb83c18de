"""Result reporters."""

from feedpoller.reporter.console import ConsoleReporter

__all__ = ["ConsoleReporter"]
