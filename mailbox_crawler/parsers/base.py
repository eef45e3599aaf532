"""
Base parser utilities for HTML parsing.

Provides common helper methods used across all parsers.
"""

from urllib.parse import urljoin

from bs4 import Tag

from mailbox_crawler.config import DEFAULT_SETTINGS
from mailbox_crawler.errors import ParseError


class BaseParser:
    """Base class with common parsing utilities."""

    def __init__(self, base_url: str = DEFAULT_SETTINGS.base_url):
        self.base_url = base_url

    @staticmethod
    def select_required(container: Tag, selector: str, what: str) -> Tag:
        """Select the first element matching ``selector`` or fail."""
        element = container.select_one(selector)
        if element is None:
            raise ParseError(f"No {what} found - {container}")
        return element

    def resolve_link(self, href: str) -> str:
        """Make a site-relative link absolute."""
        return urljoin(self.base_url, href)
