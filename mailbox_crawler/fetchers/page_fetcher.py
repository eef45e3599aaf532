"""
Anytime Mailbox page fetcher.

Fetches the country, state and location detail pages and hands them to
the matching parser.
"""

from typing import List

from mailbox_crawler.fetchers.base import BaseFetcher
from mailbox_crawler.models import DetailPage, StateLink, StatePage
from mailbox_crawler.parsers import CountryPageParser, DetailPageParser, StatePageParser


class PageFetcher(BaseFetcher):
    """Fetcher for directory pages."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        base_url = self.settings.base_url
        self.country_parser = CountryPageParser(base_url)
        self.state_parser = StatePageParser(base_url)
        self.detail_parser = DetailPageParser(base_url)

    async def fetch_country_page(self) -> List[StateLink]:
        """Fetch the country page and return its state links."""
        html = await self.fetch(self.settings.country_path)
        return self.country_parser.parse(html)

    async def fetch_state_page(self, state: StateLink) -> StatePage:
        """Fetch one state's location list."""
        html = await self.fetch(state.path)
        return self.state_parser.parse(html)

    async def fetch_detail_page(self, link: str) -> DetailPage:
        """Fetch a location's own page."""
        html = await self.fetch(link)
        return self.detail_parser.parse(html)
