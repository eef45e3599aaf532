"""Storage modules for Mailbox Crawler."""

from mailbox_crawler.storage.exporter import DataExporter

__all__ = [
    "DataExporter",
]
