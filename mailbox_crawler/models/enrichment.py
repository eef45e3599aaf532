"""
Address enrichment data models.

Contains the typed CMRA/RDI values returned by the address validation
service and the flattened output record.
"""

from dataclasses import dataclass
from enum import Enum

from mailbox_crawler.errors import EnrichmentError
from mailbox_crawler.models.mailbox import Mailbox


class YesOrNo(Enum):
    """CMRA flag. Declaration order is the sort order."""

    N = "N"
    Y = "Y"

    @classmethod
    def parse(cls, value: str) -> "YesOrNo":
        normalized = (value or "").strip().lower()
        if normalized == "y":
            return cls.Y
        if normalized == "n":
            return cls.N
        raise EnrichmentError(f"failed to parse CMRA: {value!r}")


class Rdi(Enum):
    """Residential delivery indicator. Declaration order is the sort order."""

    RESIDENTIAL = "Residential"
    COMMERCIAL = "Commercial"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str) -> "Rdi":
        normalized = (value or "").strip().lower()
        if normalized == "residential":
            return cls.RESIDENTIAL
        if normalized == "commercial":
            return cls.COMMERCIAL
        if normalized == "":
            return cls.UNKNOWN
        raise EnrichmentError(f"failed to parse RDI: {value!r}")


def _rank(member: Enum) -> int:
    return list(type(member)).index(member)


@dataclass(frozen=True)
class AdditionalInfo:
    """Enrichment result for a single address."""

    cmra: YesOrNo
    rdi: Rdi

    def is_cmra(self) -> bool:
        return self.cmra is YesOrNo.Y

    def is_residential(self) -> bool:
        return self.rdi is Rdi.RESIDENTIAL


# Column order of the exported CSV
RECORD_FIELDS = ["name", "street", "city", "state", "zip", "price", "link", "rdi", "CMRA"]


@dataclass
class Record:
    """
    Final flattened row stored in the output file.

    Built from a mailbox and its enrichment result.
    """

    name: str
    street: str
    city: str
    state: str
    zip: str
    price: str
    link: str
    rdi: Rdi
    cmra: YesOrNo

    @classmethod
    def from_mailbox_and_info(cls, mailbox: Mailbox, info: AdditionalInfo) -> "Record":
        address = mailbox.address
        return cls(
            name=mailbox.name,
            street=address.line1,
            city=address.city,
            state=address.state,
            zip=address.full_zip(),
            price=mailbox.price,
            link=mailbox.link,
            rdi=info.rdi,
            cmra=info.cmra,
        )

    def sort_key(self) -> tuple:
        return (_rank(self.cmra), _rank(self.rdi))

    def to_row(self) -> dict:
        """Convert to a CSV row keyed by ``RECORD_FIELDS``."""
        return {
            "name": self.name,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zip": self.zip,
            "price": self.price,
            "link": self.link,
            "rdi": self.rdi.value,
            "CMRA": self.cmra.value,
        }
