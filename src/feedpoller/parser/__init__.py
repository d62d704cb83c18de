"""Default feed parser and item normalization."""

from feedpoller.parser.normalize import normalize_document, normalize_item, parse_timestamp
from feedpoller.parser.xml import parse_feed

__all__ = ["normalize_document", "normalize_item", "parse_feed", "parse_timestamp"]
