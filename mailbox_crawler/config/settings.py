"""
Crawler settings and configuration constants.

This module centralizes all configurable parameters for the crawler,
making it easy to adjust behavior without modifying core logic.
"""

from dataclasses import dataclass


@dataclass
class CrawlerSettings:
    """Configuration settings for the mailbox crawler."""

    # Site configuration
    base_url: str = "https://www.anytimemailbox.com"
    country_path: str = "/l/usa"  # Only the US directory is crawled
    user_agent: str = "Mozilla/5.0 (X11; Linux x86_64; rv:128.0) Gecko/20100101 Firefox/128.0"

    # Concurrency settings (per stage)
    state_concurrency: int = 5
    detail_concurrency: int = 10
    enrich_concurrency: int = 10

    # Timeout and retry settings
    request_timeout: int = 30
    max_retries: int = 3
    retry_initial_delay: float = 1.0  # Base delay for exponential backoff
    retry_max_delay: float = 5.0
    retry_jitter: bool = True

    # Fail the run when any detail page could not be fetched or parsed
    require_complete_details: bool = True

    # Output
    output_file: str = "result/mailboxes.csv"


# Default settings instance
DEFAULT_SETTINGS = CrawlerSettings()
