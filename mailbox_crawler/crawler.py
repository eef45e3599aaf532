#!/usr/bin/env python3
"""
Anytime Mailbox directory crawler.

Crawls the US location directory, completes every street address from the
location's own page, enriches the addresses through Smarty and saves the
non-CMRA locations to CSV.

Usage:
    CREDENTIALS=ID1=SECRET1,ID2=SECRET2 python main.py [options]

Examples:
    python main.py
    python main.py --output result/mailboxes.csv -v
    python main.py --lenient-details
"""

import argparse
import asyncio
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import aiohttp
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn, TimeRemainingColumn, MofNCompleteColumn

from mailbox_crawler.config import CrawlerSettings, DEFAULT_SETTINGS
from mailbox_crawler.errors import CrawlError, CrawlerError
from mailbox_crawler.external import (
    MailboxEnricher,
    SmartyClient,
    SmartyClientPool,
    build_records,
    count_by_rdi,
    load_credentials,
)
from mailbox_crawler.fetchers import BaseFetcher, PageFetcher
from mailbox_crawler.models import Mailbox, StateLink, StatePage
from mailbox_crawler.storage import DataExporter
from mailbox_crawler.utils.concurrency import bounded_gather
from mailbox_crawler.utils.logging import setup_logging, close_logging, get_logger

# Rich console for phase headers
console = Console()

logger = get_logger()


def create_progress() -> Progress:
    """Create a Rich progress bar with consistent styling"""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=40),
        MofNCompleteColumn(),
        TextColumn("•"),
        TimeElapsedColumn(),
        TextColumn("<"),
        TimeRemainingColumn(),
        console=console,
        transient=False,
    )


class MailboxCrawler:
    """Drives the country → state → detail page stages."""

    def __init__(self, fetcher: PageFetcher, settings: CrawlerSettings = DEFAULT_SETTINGS):
        self.fetcher = fetcher
        self.settings = settings

    async def fetch_states(self) -> List[StateLink]:
        """Fetch the country page and list its states."""
        states = await self.fetcher.fetch_country_page()
        logger.info(f"Found {len(states)} states")
        return states

    async def fetch_state_pages(
        self,
        states: List[StateLink],
        progress: Optional[Progress] = None,
    ) -> List[StatePage]:
        """
        Fetch and parse every state page.

        Every state is required: a single failure fails the crawl once all
        states have been tried.
        """
        total = len(states)
        task = progress.add_task("Fetching states", total=total) if progress else None

        async def fetch_one(idx: int, state: StateLink) -> StatePage:
            logger.info(f"[{idx + 1}/{total}] fetching [{state.name}] state page...")
            try:
                return await self.fetcher.fetch_state_page(state)
            finally:
                if progress and task is not None:
                    progress.advance(task)

        outcomes = await bounded_gather(states, fetch_one, self.settings.state_concurrency)

        failed = 0
        for state, outcome in zip(states, outcomes):
            if not outcome.ok:
                logger.error(f"cannot fetch state [{state.name}]: {outcome.error!r}")
                failed += 1
        if failed:
            raise CrawlError(f"{failed} of {total} states cannot be fetched")

        return [outcome.value for outcome in outcomes]

    def build_mailboxes(self, state_pages: List[StatePage]) -> List[Mailbox]:
        """
        Convert every parsed listing into a mailbox.

        The crawl fails if any location card on any page did not make it
        into a mailbox.
        """
        total = sum(page.count() for page in state_pages)
        mailboxes = []
        for page in state_pages:
            for listing in page.listings:
                try:
                    mailboxes.append(listing.to_mailbox())
                except CrawlerError as e:
                    logger.error(f"cannot convert location [{listing.name}] to mailbox: {e}")

        if len(mailboxes) != total:
            raise CrawlError(
                f"Some mailboxes cannot be fetched: {len(mailboxes)} of {total} converted"
            )
        return mailboxes

    async def update_streets(
        self,
        mailboxes: List[Mailbox],
        progress: Optional[Progress] = None,
    ) -> List[Mailbox]:
        """
        Replace each mailbox's street line with the one from its detail page.

        Mailboxes whose page cannot be fetched or parsed are dropped.
        """
        total = len(mailboxes)
        task = progress.add_task("Fetching details", total=total) if progress else None

        async def update_one(idx: int, mailbox: Mailbox) -> Mailbox:
            logger.info(f"[{idx + 1}/{total}] fetching the detail page of [{mailbox.name}]...")
            try:
                detail = await self.fetcher.fetch_detail_page(mailbox.link)
                mailbox.address.line1 = detail.street()
                return mailbox
            finally:
                if progress and task is not None:
                    progress.advance(task)

        outcomes = await bounded_gather(mailboxes, update_one, self.settings.detail_concurrency)

        updated = []
        for mailbox, outcome in zip(mailboxes, outcomes):
            if outcome.ok:
                updated.append(outcome.value)
            else:
                logger.error(f"cannot fetch detail page for [{mailbox.link}]: {outcome.error!r}")

        if len(updated) != total:
            message = f"Some mailbox's detail cannot be fetched: {len(updated)} of {total} updated"
            if self.settings.require_complete_details:
                raise CrawlError(message)
            logger.warning(message)
        return updated

    async def fetch(self, progress: Optional[Progress] = None) -> List[Mailbox]:
        """Run all page stages and return mailboxes with complete addresses."""
        states = await self.fetch_states()
        state_pages = await self.fetch_state_pages(states, progress)
        mailboxes = self.build_mailboxes(state_pages)
        logger.info(f"Converted {len(mailboxes)} locations to mailboxes")
        return await self.update_streets(mailboxes, progress)


async def run_full_crawl(settings: CrawlerSettings = DEFAULT_SETTINGS, verbose: bool = False) -> Path:
    """Run the complete crawl process

    Phases:
    1. Fetch state pages
    2. Fetch location detail pages
    3. Inquire address info through Smarty
    4. Export CSV
    """
    output_file = Path(settings.output_file)
    setup_logging(output_file.parent, verbose=verbose)

    logger.info("#" * 60)
    logger.info("MAILBOX CRAWLER")
    logger.info("#" * 60)
    logger.info(f"Site: {settings.base_url}{settings.country_path}")
    logger.info(f"Output File: {output_file}")

    credentials = load_credentials()
    logger.info(f"Loaded {len(credentials)} Smarty credentials")

    connector = BaseFetcher.create_connector()
    async with aiohttp.ClientSession(connector=connector) as session:
        fetcher = PageFetcher(session, settings)
        crawler = MailboxCrawler(fetcher, settings)

        console.rule("[bold cyan]Phase 1-2: Fetching Mailboxes")
        with create_progress() as progress:
            mailboxes = await crawler.fetch(progress)
        logger.info(f"finished fetching, got [{len(mailboxes)}] mailboxes in total")

        console.rule("[bold green]Phase 3: Inquiring Address Info")
        pool = SmartyClientPool([SmartyClient(session, auth_id, token) for auth_id, token in credentials])
        enricher = MailboxEnricher(pool, settings.enrich_concurrency)
        with create_progress() as progress:
            infos = await enricher.enrich(mailboxes, progress)
        logger.info(f"Lookups per credential: {pool.usage()}")

    records = build_records(infos)

    console.rule("[bold yellow]Phase 4: Saving Records")
    DataExporter(output_file).export_records(records)

    logger.info("#" * 60)
    logger.info("CRAWL COMPLETE")
    logger.info("#" * 60)
    logger.info(f"Mailboxes: {len(mailboxes)}")
    logger.info(f"Enriched: {len(infos)}")
    logger.info(f"Non-CMRA Records: {len(records)}")
    for rdi, count in sorted(count_by_rdi(records).items()):
        logger.info(f"  {rdi}: {count}")
    logger.info("#" * 60)
    return output_file


def build_settings(args: argparse.Namespace) -> CrawlerSettings:
    """Apply command line overrides to the default settings."""
    overrides = {"output_file": args.output}
    if args.lenient_details:
        overrides["require_complete_details"] = False
    if args.state_concurrency:
        overrides["state_concurrency"] = args.state_concurrency
    if args.detail_concurrency:
        overrides["detail_concurrency"] = args.detail_concurrency
    if args.enrich_concurrency:
        overrides["enrich_concurrency"] = args.enrich_concurrency
    return replace(DEFAULT_SETTINGS, **overrides)


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Crawl Anytime Mailbox US locations and enrich them with Smarty address data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Credentials:
  CREDENTIALS=ID1=SECRET1[,ID2=SECRET2]*  Smarty auth id/token pairs

Examples:
  python main.py
  python main.py --output result/mailboxes.csv -v
  python main.py --lenient-details
        """
    )

    parser.add_argument("--output", default=DEFAULT_SETTINGS.output_file, help=f"Output CSV file (default: {DEFAULT_SETTINGS.output_file})")
    parser.add_argument("--lenient-details", action="store_true", help="Drop mailboxes whose detail page fails instead of aborting")
    parser.add_argument("--state-concurrency", type=int, help=f"Concurrent state page fetches (default: {DEFAULT_SETTINGS.state_concurrency})")
    parser.add_argument("--detail-concurrency", type=int, help=f"Concurrent detail page fetches (default: {DEFAULT_SETTINGS.detail_concurrency})")
    parser.add_argument("--enrich-concurrency", type=int, help=f"Concurrent Smarty lookups (default: {DEFAULT_SETTINGS.enrich_concurrency})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging (debug level)")

    args = parser.parse_args(argv)
    settings = build_settings(args)

    try:
        asyncio.run(run_full_crawl(settings, verbose=args.verbose))
    except CrawlerError as e:
        logger.error(f"Error: {e!r}")
        sys.exit(1)
    finally:
        close_logging()


if __name__ == "__main__":
    main()
