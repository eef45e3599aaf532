"""
Location detail page parser.

Reads the address block of a single location page, whose line count
tells how many street lines the address has.
"""

from bs4 import BeautifulSoup

from mailbox_crawler.errors import ParseError
from mailbox_crawler.models import DetailPage
from mailbox_crawler.parsers.base import BaseParser


DETAIL_BLOCK_SELECTORS = (
    'div.t-location-info',
    'div.theme-location-info',
)


class DetailPageParser(BaseParser):
    """Parser for a location detail page."""

    def parse(self, page_html: str) -> DetailPage:
        soup = BeautifulSoup(page_html, 'html.parser')

        block = None
        for selector in DETAIL_BLOCK_SELECTORS:
            block = soup.select_one(selector)
            if block is not None:
                break
        if block is None:
            raise ParseError("No location info block found, page structure might be changed")

        lines = []
        for child in block.find_all(recursive=False):
            text = child.get_text(" ", strip=True)
            if text:
                lines.append(text)

        return DetailPage(lines=lines)


def parse_detail_page(page_html: str) -> DetailPage:
    """Parse a location detail page (standalone helper)."""
    return DetailPageParser().parse(page_html)
