"""
Page-level data models.

Intermediate structures produced by the page parsers before listings are
turned into ``Mailbox`` records.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from mailbox_crawler.errors import ParseError
from mailbox_crawler.models.mailbox import Address, Mailbox


PRICE_PREFIX = "Starting from"


def normalize_price(price: str) -> str:
    """
    Compact a listing price.

    ``"Starting from US$ 9.99 / month"`` becomes ``"US$9.99/month"``.
    """
    return "".join(price.replace(PRICE_PREFIX, "", 1).split())


@dataclass
class StateLink:
    """A state entry on the country page."""

    path: str
    name: str


@dataclass
class LocationListing:
    """
    A location card from a state page.

    ``line2`` holds the raw ``City, ST 12345[-6789]`` line and is decomposed
    when the listing is converted into a mailbox.
    """

    name: str
    line1: str
    line2: str
    price: str
    link: str

    def _region(self) -> Optional[str]:
        parts = self.line2.split(",")
        if len(parts) < 2:
            return None
        return parts[1].strip()

    def parse_city(self) -> str:
        city = self.line2.split(",")[0].strip()
        if not city:
            raise ParseError(f"Failed to parse city from: {self.line2!r}")
        return city

    def parse_state(self) -> str:
        region = self._region()
        tokens = region.split() if region else []
        if not tokens:
            raise ParseError(f"Failed to parse state from: {self.line2!r}")
        return tokens[0]

    def parse_zip(self) -> Tuple[str, Optional[str]]:
        region = self._region()
        tokens = region.split() if region else []
        if len(tokens) < 2:
            raise ParseError(f"Failed to parse zip code from: {self.line2!r}")
        segments = tokens[1].split("-")
        zip4 = segments[1] if len(segments) > 1 else None
        return segments[0], zip4

    def to_address(self) -> Address:
        zip_code, zip4 = self.parse_zip()
        try:
            return Address(
                line1=self.line1,
                city=self.parse_city(),
                state=self.parse_state(),
                zip=zip_code,
                zip4=zip4,
            )
        except ValueError as e:
            raise ParseError(f"Invalid address {self.line2!r}: {e}") from e

    def to_mailbox(self) -> Mailbox:
        return Mailbox(
            name=self.name,
            address=self.to_address(),
            link=self.link,
            price=normalize_price(self.price),
        )


@dataclass
class StatePage:
    """Parsed state page: the listings that parsed and the ones that did not."""

    listings: List[LocationListing] = field(default_factory=list)
    failures: List[ParseError] = field(default_factory=list)

    def count(self) -> int:
        """Number of location containers found on the page."""
        return len(self.listings) + len(self.failures)


@dataclass
class DetailPage:
    """Non-empty text lines of a location's address block."""

    lines: List[str]

    def street(self) -> str:
        """
        Reconstruct the full street line.

        The block holds the location name, one to three street lines, the
        city line and the country, so the line count decides how many street
        lines there are.
        """
        count = len(self.lines)
        if count == 4:
            return self.lines[1]
        if count == 5:
            return f"{self.lines[1]} {self.lines[2]}"
        if count == 6:
            return f"{self.lines[1]} {self.lines[2]} {self.lines[3]}"
        raise ParseError(
            f"Unexpected number of address lines: {count}, page structure might be changed"
        )
