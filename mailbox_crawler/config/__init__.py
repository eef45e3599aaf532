"""Configuration module for Mailbox Crawler."""

from mailbox_crawler.config.settings import CrawlerSettings, DEFAULT_SETTINGS

__all__ = [
    "CrawlerSettings",
    "DEFAULT_SETTINGS",
]
