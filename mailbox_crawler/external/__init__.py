"""
External address validation module.

Provides the Smarty US Street client, the quota-aware client pool and the
mailbox enricher built on top of them.
"""

from mailbox_crawler.external.config import (
    CREDENTIALS_ENV,
    SmartyConfig,
    DEFAULT_SMARTY_CONFIG,
    load_credentials,
    parse_credentials,
)
from mailbox_crawler.external.smarty_client import SmartyClient, candidate_to_info
from mailbox_crawler.external.pool import CredentialSlot, SmartyClientPool
from mailbox_crawler.external.enricher import MailboxEnricher, build_records, count_by_rdi

__all__ = [
    # Config
    "CREDENTIALS_ENV",
    "SmartyConfig",
    "DEFAULT_SMARTY_CONFIG",
    "load_credentials",
    "parse_credentials",
    # Client
    "SmartyClient",
    "candidate_to_info",
    "CredentialSlot",
    "SmartyClientPool",
    # Enrichment
    "MailboxEnricher",
    "build_records",
    "count_by_rdi",
]
