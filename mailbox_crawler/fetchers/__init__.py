"""Async HTTP fetchers for Anytime Mailbox pages."""

from mailbox_crawler.fetchers.base import (
    BadStatusError,
    BaseFetcher,
    TRANSIENT_ERRORS,
    backoff_delays,
    retry_async,
)
from mailbox_crawler.fetchers.page_fetcher import PageFetcher

__all__ = [
    # Base
    "BadStatusError",
    "BaseFetcher",
    "TRANSIENT_ERRORS",
    "backoff_delays",
    "retry_async",
    # Directory pages
    "PageFetcher",
]
