"""
Mailbox-related data models.

Contains dataclasses for a mailbox location and its postal address as
listed on the Anytime Mailbox directory.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(unsafe_hash=True)
class Address:
    """
    A US postal address.

    ``line1`` starts as the street line shown on the state listing card and
    is replaced once by the street reconstructed from the detail page.
    """

    line1: str
    city: str
    state: str
    zip: str
    zip4: Optional[str] = None

    def __post_init__(self):
        if not self.zip:
            raise ValueError("zip code must not be empty")
        if self.zip4 is not None and not (len(self.zip4) == 4 and self.zip4.isdigit()):
            raise ValueError(f"zip+4 extension must be 4 digits, got {self.zip4!r}")

    def full_zip(self) -> str:
        """ZIP code with the +4 extension when known (``12345`` or ``12345-6789``)."""
        if self.zip4:
            return f"{self.zip}-{self.zip4}"
        return self.zip


@dataclass(unsafe_hash=True)
class Mailbox:
    """
    A mailbox location from the directory.

    Hashes on every field; two identical listings collapse into one entry
    when used as a mapping key.
    """

    name: str
    address: Address
    link: str
    price: str
