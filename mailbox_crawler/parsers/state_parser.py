"""
State page parser.

Parses a state's location list (e.g. /l/usa/alabama) into location
listings. A broken location card fails only that card; the page keeps a
count of every card found so callers can detect silent losses.
"""

import html
import re
from typing import Tuple

from bs4 import BeautifulSoup, Tag

from mailbox_crawler.errors import ParseError
from mailbox_crawler.models import LocationListing, StatePage
from mailbox_crawler.parsers.base import BaseParser
from mailbox_crawler.utils.logging import get_logger

logger = get_logger()

LOCATION_CONTAINER_SELECTOR = 'div[class="theme-location-item"]'
LOCATION_TITLE_SELECTOR = 'h3[class="t-title"]'
LOCATION_PRICE_SELECTOR = 'div[class="t-price"]'
LOCATION_ADDRESS_SELECTOR = 'div[class="t-addr"]'
LOCATION_PLAN_SELECTOR = 'a.gt-plan'

LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)


def split_address(address: str) -> Tuple[str, str]:
    """
    Split the inner markup of an address block into its first two lines.

    ``"123 Main St<br>City, ST 12345<br>"`` gives
    ``("123 Main St", "City, ST 12345")``.
    """
    segments = LINE_BREAK.split(address)
    if len(segments) < 2:
        raise ParseError(f"Failed to split address - {address!r}")
    line1, line2 = segments[:2]
    return html.unescape(line1).strip(), html.unescape(line2).strip()


class StatePageParser(BaseParser):
    """Parser for a state page listing mailbox locations."""

    def parse(self, page_html: str) -> StatePage:
        soup = BeautifulSoup(page_html, 'html.parser')
        page = StatePage()

        for container in soup.select(LOCATION_CONTAINER_SELECTOR):
            try:
                page.listings.append(self._parse_location(container))
            except ParseError as e:
                logger.warning(f"Skipping location card: {e}")
                page.failures.append(e)

        return page

    def _parse_location(self, container: Tag) -> LocationListing:
        """Parse a single location card."""
        title = self.select_required(container, LOCATION_TITLE_SELECTOR, "title")
        price = self.select_required(container, LOCATION_PRICE_SELECTOR, "price")
        address = self.select_required(container, LOCATION_ADDRESS_SELECTOR, "address")
        plan = self.select_required(container, LOCATION_PLAN_SELECTOR, "plan button")

        href = plan.get("href")
        if not href:
            raise ParseError(f"No plan link found - {container}")

        line1, line2 = split_address(address.decode_contents())

        return LocationListing(
            name=title.get_text().strip(),
            line1=line1,
            line2=line2,
            price=price.get_text(),
            link=self.resolve_link(href),
        )


def parse_state_page(page_html: str) -> StatePage:
    """Parse a state page (standalone helper)."""
    return StatePageParser().parse(page_html)
