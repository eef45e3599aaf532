"""
Country page parser.

Extracts the state list from the country page (e.g. /l/usa) with a
pattern match over the raw HTML instead of a full parse.
"""

import html
import re
from typing import List

from mailbox_crawler.errors import ParseError
from mailbox_crawler.models import StateLink
from mailbox_crawler.parsers.base import BaseParser


STATE_LINK_PATTERN = re.compile(
    r"""<a class=['"]theme-simple-link['"] href=['"]([^'"]*)['"][^>]*>(.*?)</a>""",
    re.DOTALL,
)


class CountryPageParser(BaseParser):
    """Parser for the country page listing all states."""

    def parse(self, page_html: str) -> List[StateLink]:
        states = []

        for match in STATE_LINK_PATTERN.finditer(page_html):
            groups = match.groups()
            if len(groups) != 2:
                raise ParseError(
                    f"Unexpected capture length: {len(groups)}, page structure might be changed"
                )
            href, name = groups
            states.append(StateLink(path=html.unescape(href), name=html.unescape(name).strip()))

        if not states:
            raise ParseError("No state found, page structure might be changed")

        return states


def parse_country_page(page_html: str) -> List[StateLink]:
    """Parse the country page (standalone helper)."""
    return CountryPageParser().parse(page_html)
