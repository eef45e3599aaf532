"""
Configuration for the Smarty US Street address validation API.

Credentials come from the ``CREDENTIALS`` environment variable as
``ID1=SECRET1[,ID2=SECRET2]*``; each pair becomes one lookup quota slot.
"""

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from mailbox_crawler.errors import ConfigError


CREDENTIALS_ENV = "CREDENTIALS"


@dataclass
class SmartyConfig:
    """Configuration for the Smarty US Street API."""

    api_url: str = "https://us-street.api.smarty.com/street-address"
    license: str = "us-core-cloud"
    match_strategy: str = "enhanced"
    candidates: int = 1

    # A free trial account is limited to 1000 lookups per month
    lookup_quota: int = 1000

    # Request configuration
    request_timeout: int = 30
    max_retries: int = 3
    retry_delay: float = 1.0


DEFAULT_SMARTY_CONFIG = SmartyConfig()


def parse_credentials(value: str) -> List[Tuple[str, str]]:
    """
    Parse ``ID1=SECRET1,ID2=SECRET2`` into (auth_id, auth_token) pairs.

    Raises:
        ConfigError: On an empty value or a malformed pair
    """
    credentials = []
    for pair in value.split(","):
        pair = pair.strip()
        if not pair:
            continue
        auth_id, sep, auth_token = pair.partition("=")
        if not sep or not auth_id or not auth_token:
            raise ConfigError(f"Malformed credential pair: {pair.split('=')[0]!r}=...")
        credentials.append((auth_id.strip(), auth_token.strip()))

    if not credentials:
        raise ConfigError("No credentials configured")
    return credentials


def load_credentials(environ: Optional[Mapping[str, str]] = None) -> List[Tuple[str, str]]:
    """Load credentials from the environment."""
    environ = os.environ if environ is None else environ
    value = environ.get(CREDENTIALS_ENV)
    if not value:
        raise ConfigError(f"`{CREDENTIALS_ENV}` environment variable must be set")
    return parse_credentials(value)
