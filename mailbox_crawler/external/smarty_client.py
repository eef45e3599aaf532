"""
Smarty US Street API client.

Looks up a single address and turns the first match candidate into the
CMRA / RDI pair the crawler needs.
"""

import asyncio
from typing import Any, Dict, List

import aiohttp

from mailbox_crawler.errors import EnrichmentError, NoMatchError
from mailbox_crawler.external.config import SmartyConfig, DEFAULT_SMARTY_CONFIG
from mailbox_crawler.fetchers.base import BadStatusError, retry_async
from mailbox_crawler.models import AdditionalInfo, Address, Rdi, YesOrNo
from mailbox_crawler.utils.logging import get_logger

logger = get_logger(__name__)


def candidate_to_info(candidate: Dict[str, Any]) -> AdditionalInfo:
    """Convert a Smarty match candidate into AdditionalInfo."""
    analysis = candidate.get("analysis") or {}
    metadata = candidate.get("metadata") or {}
    return AdditionalInfo(
        cmra=YesOrNo.parse(analysis.get("dpv_cmra", "")),
        rdi=Rdi.parse(metadata.get("rdi", "")),
    )


class SmartyClient:
    """Async client for one Smarty account."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        auth_id: str,
        auth_token: str,
        config: SmartyConfig = DEFAULT_SMARTY_CONFIG,
    ):
        """
        Initialize Smarty client.

        Args:
            session: aiohttp session
            auth_id: Smarty auth id
            auth_token: Smarty auth token
            config: API configuration
        """
        self.session = session
        self.auth_id = auth_id
        self.auth_token = auth_token
        self.config = config
        self.timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def __repr__(self) -> str:
        return f"SmartyClient(auth_id={self.auth_id!r})"

    def build_params(self, address: Address) -> Dict[str, str]:
        """Build lookup query parameters for an address."""
        return {
            "auth-id": self.auth_id,
            "auth-token": self.auth_token,
            "license": self.config.license,
            "street": address.line1,
            "city": address.city,
            "state": address.state,
            "zipcode": address.full_zip(),
            "match": self.config.match_strategy,
            "candidates": str(self.config.candidates),
        }

    async def _lookup(self, address: Address) -> List[Dict[str, Any]]:
        async with self.session.get(
            self.config.api_url,
            params=self.build_params(address),
            headers={"Accept": "application/json"},
            timeout=self.timeout
        ) as resp:
            if resp.status != 200:
                raise BadStatusError(resp.status, self.config.api_url)
            return await resp.json()

    async def inquire_address(self, address: Address) -> AdditionalInfo:
        """
        Look up one address.

        Raises:
            NoMatchError: The service returned no candidate
            EnrichmentError: Transport failure or unusable response
        """
        try:
            candidates = await retry_async(
                lambda: self._lookup(address),
                max_retries=self.config.max_retries,
                retry_on=(aiohttp.ClientError, asyncio.TimeoutError, BadStatusError),
                initial_delay=self.config.retry_delay,
            )
        except (aiohttp.ClientError, asyncio.TimeoutError, BadStatusError) as e:
            raise EnrichmentError(f"Smarty lookup failed for {address}: {e}") from e

        if not isinstance(candidates, list):
            raise EnrichmentError(f"Unexpected Smarty response: {candidates!r}")
        if not candidates:
            raise NoMatchError(f"no results found: {address}")

        return candidate_to_info(candidates[0])
