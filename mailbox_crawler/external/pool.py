"""
Quota-aware Smarty client pool.

Combines several low-quota accounts into one larger effective quota by
routing each lookup through the first account that still has lookups left.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, List, Sequence

from mailbox_crawler.errors import ConfigError, QuotaExhaustedError
from mailbox_crawler.external.config import DEFAULT_SMARTY_CONFIG
from mailbox_crawler.models import AdditionalInfo, Address
from mailbox_crawler.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CredentialSlot:
    """One account and the number of lookups routed through it."""

    client: Any
    lookups: int = 0

    def is_exceeded(self, quota: int) -> bool:
        return self.lookups > quota


class SmartyClientPool:
    """
    Routes lookups across credential slots in configured order.

    Slot selection and the counter increment happen under one lock so
    concurrent callers can never push a slot past its quota unnoticed.
    """

    def __init__(self, clients: Sequence[Any], quota: int = DEFAULT_SMARTY_CONFIG.lookup_quota):
        if not clients:
            raise ConfigError("at least one client is required")
        self.quota = quota
        self.slots: List[CredentialSlot] = [CredentialSlot(client=c) for c in clients]
        self._lock = asyncio.Lock()

    async def _acquire(self) -> CredentialSlot:
        async with self._lock:
            for index, slot in enumerate(self.slots):
                if not slot.is_exceeded(self.quota):
                    slot.lookups += 1
                    if slot.lookups == 1 and index > 0:
                        logger.info(f"switching to credential slot #{index + 1}")
                    return slot
        raise QuotaExhaustedError(
            f"all {len(self.slots)} clients have exceeded the quota of {self.quota} lookups"
        )

    async def inquire(self, address: Address) -> AdditionalInfo:
        """Look up an address through the next available slot."""
        slot = await self._acquire()
        return await slot.client.inquire_address(address)

    def usage(self) -> List[int]:
        """Lookups routed through each slot so far."""
        return [slot.lookups for slot in self.slots]
