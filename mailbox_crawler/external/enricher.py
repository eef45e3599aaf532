"""
Mailbox enrichment module.

Looks up every mailbox address through the Smarty client pool and merges
the results into output records.
"""

from typing import Dict, Iterable, List, Optional

from rich.progress import Progress

from mailbox_crawler.config import DEFAULT_SETTINGS
from mailbox_crawler.errors import QuotaExhaustedError
from mailbox_crawler.external.pool import SmartyClientPool
from mailbox_crawler.models import AdditionalInfo, Mailbox, Record
from mailbox_crawler.utils.concurrency import bounded_gather
from mailbox_crawler.utils.logging import get_logger

logger = get_logger(__name__)


class MailboxEnricher:
    """
    Enriches mailboxes with CMRA and RDI information.

    A failed lookup drops that mailbox; running out of quota stops the
    whole pass.
    """

    def __init__(self, pool: SmartyClientPool, concurrency: int = DEFAULT_SETTINGS.enrich_concurrency):
        self.pool = pool
        self.concurrency = concurrency
        self.stats = {
            "total": 0,
            "enriched": 0,
            "errors": 0,
        }

    async def enrich(
        self,
        mailboxes: List[Mailbox],
        progress: Optional[Progress] = None,
    ) -> Dict[Mailbox, AdditionalInfo]:
        """
        Look up every mailbox address.

        Args:
            mailboxes: Mailboxes with their final street line
            progress: Rich progress bar

        Returns:
            Mapping of mailbox to its enrichment result

        Raises:
            QuotaExhaustedError: When no credential has lookups left
        """
        total = len(mailboxes)
        task = None
        if progress:
            task = progress.add_task("Inquiring addresses", total=total)

        async def inquire(idx: int, mailbox: Mailbox) -> AdditionalInfo:
            logger.info(f"[{idx + 1}/{total}] fetching mailbox address info for [{mailbox.name}]")
            try:
                return await self.pool.inquire(mailbox.address)
            finally:
                if progress and task is not None:
                    progress.advance(task)

        outcomes = await bounded_gather(
            mailboxes, inquire, self.concurrency, fatal=(QuotaExhaustedError,)
        )

        results: Dict[Mailbox, AdditionalInfo] = {}
        for mailbox, outcome in zip(mailboxes, outcomes):
            if outcome.ok:
                results[mailbox] = outcome.value
            else:
                logger.error(f"cannot inquire address info for [{mailbox.name}]: {outcome.error!r}")
                self.stats["errors"] += 1

        self.stats["total"] += total
        self.stats["enriched"] += len(results)
        return results


def build_records(infos: Dict[Mailbox, AdditionalInfo]) -> List[Record]:
    """Drop CMRA addresses and flatten the rest into output records."""
    return [
        Record.from_mailbox_and_info(mailbox, info)
        for mailbox, info in infos.items()
        if not info.is_cmra()
    ]


def count_by_rdi(records: Iterable[Record]) -> Dict[str, int]:
    """Count records per RDI value."""
    counts: Dict[str, int] = {}
    for record in records:
        counts[record.rdi.value] = counts.get(record.rdi.value, 0) + 1
    return counts
