"""Data models for Mailbox Crawler."""

from mailbox_crawler.models.mailbox import Address, Mailbox
from mailbox_crawler.models.enrichment import AdditionalInfo, Rdi, Record, YesOrNo
from mailbox_crawler.models.listing import (
    DetailPage,
    LocationListing,
    StateLink,
    StatePage,
    normalize_price,
)

__all__ = [
    "Address",
    "Mailbox",
    "AdditionalInfo",
    "Rdi",
    "Record",
    "YesOrNo",
    "DetailPage",
    "LocationListing",
    "StateLink",
    "StatePage",
    "normalize_price",
]
