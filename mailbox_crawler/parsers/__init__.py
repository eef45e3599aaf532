"""HTML parsers for Anytime Mailbox pages."""

from mailbox_crawler.parsers.base import BaseParser
from mailbox_crawler.parsers.country_parser import CountryPageParser, parse_country_page
from mailbox_crawler.parsers.state_parser import StatePageParser, parse_state_page, split_address
from mailbox_crawler.parsers.detail_parser import DetailPageParser, parse_detail_page

__all__ = [
    "BaseParser",
    "CountryPageParser",
    "StatePageParser",
    "DetailPageParser",
    "parse_country_page",
    "parse_state_page",
    "parse_detail_page",
    "split_address",
]
