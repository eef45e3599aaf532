"""
Exception hierarchy for Mailbox Crawler.

Fatal conditions propagate to the entry point as one of these; per-item
failures are caught by the owning stage, logged and dropped.
"""

from typing import Optional


class CrawlerError(Exception):
    """Base class for all crawler errors."""


class ConfigError(CrawlerError):
    """Missing or malformed configuration (e.g. credentials)."""


class FetchError(CrawlerError):
    """A page could not be fetched within the retry budget."""

    def __init__(self, url: str, attempts: int, cause: Optional[BaseException] = None):
        self.url = url
        self.attempts = attempts
        self.cause = cause
        super().__init__(f"Failed to fetch {url} after {attempts} attempts: {cause!r}")


class ParseError(CrawlerError):
    """Page structure did not match what the parser expects."""


class EnrichmentError(CrawlerError):
    """The address validation service failed or returned an unusable answer."""


class NoMatchError(EnrichmentError):
    """The address validation service returned no candidate for an address."""


class QuotaExhaustedError(CrawlerError):
    """Every configured credential has used up its lookup quota."""


class CrawlError(CrawlerError):
    """A crawl stage failed as a whole (e.g. missing states, count mismatch)."""
