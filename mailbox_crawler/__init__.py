"""Anytime Mailbox directory crawler with Smarty address enrichment."""

__version__ = "0.1.0"
