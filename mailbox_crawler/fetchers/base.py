"""
Base fetcher utilities for async HTTP operations.

Provides URL resolution, the retry-with-backoff helper and the common
GET-with-retry pattern used by all fetchers.
"""

import asyncio
import random
from typing import Awaitable, Callable, Dict, Tuple, Type, TypeVar
from urllib.parse import urljoin

import aiohttp

from mailbox_crawler.config import CrawlerSettings, DEFAULT_SETTINGS
from mailbox_crawler.errors import FetchError
from mailbox_crawler.utils.logging import get_logger

logger = get_logger()

T = TypeVar('T')

# Default retry configuration
MAX_RETRIES = DEFAULT_SETTINGS.max_retries
RETRY_INITIAL_DELAY = DEFAULT_SETTINGS.retry_initial_delay
RETRY_MAX_DELAY = DEFAULT_SETTINGS.retry_max_delay


class BadStatusError(Exception):
    """Non-200 HTTP response."""

    def __init__(self, status: int, url: str):
        self.status = status
        self.url = url
        super().__init__(f"HTTP {status} for {url}")


# Failures worth another attempt
TRANSIENT_ERRORS: Tuple[Type[BaseException], ...] = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
    UnicodeDecodeError,
    BadStatusError,
)


def backoff_delays(
    initial: float = RETRY_INITIAL_DELAY,
    maximum: float = RETRY_MAX_DELAY,
    jitter: bool = False,
):
    """Yield an endless exponential delay sequence capped at ``maximum``."""
    delay = initial
    while True:
        if jitter:
            yield random.uniform(delay / 2, delay)
        else:
            yield delay
        delay = min(delay * 2, maximum)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = MAX_RETRIES,
    retry_on: Tuple[Type[BaseException], ...] = TRANSIENT_ERRORS,
    initial_delay: float = RETRY_INITIAL_DELAY,
    max_delay: float = RETRY_MAX_DELAY,
    jitter: bool = False,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Run ``operation`` until it succeeds or the retry budget is spent.

    A failure is transient while the attempt count is within ``max_retries``
    and permanent once it exceeds it, so the operation runs at most
    ``max_retries + 1`` times. Exceptions outside ``retry_on`` propagate
    immediately.

    Args:
        operation: Zero-argument coroutine factory
        max_retries: Number of retries after the first attempt
        retry_on: Exception types treated as transient
        initial_delay: First backoff delay in seconds
        max_delay: Upper bound for the backoff delay
        jitter: Randomize each delay within [delay/2, delay]
        sleep: Awaitable sleep, replaceable in tests

    Returns:
        The operation's result
    """
    delays = backoff_delays(initial_delay, max_delay, jitter)
    attempts = 0
    while True:
        attempts += 1
        if attempts > 1:
            logger.warning(f"retrying for the {attempts} time")
        try:
            return await operation()
        except retry_on:
            if attempts > max_retries:
                raise
            await sleep(next(delays))


class BaseFetcher:
    """Base class for async HTTP fetchers."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        settings: CrawlerSettings = DEFAULT_SETTINGS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize fetcher.

        Args:
            session: Shared aiohttp session
            settings: Crawler settings (base URL, retries, timeouts)
            sleep: Awaitable used between retries
        """
        self.session = session
        self.settings = settings
        self.timeout = aiohttp.ClientTimeout(total=settings.request_timeout)
        self._sleep = sleep

    def resolve_url(self, url_or_path: str) -> str:
        """Resolve a path against the site origin; absolute URLs pass through."""
        if url_or_path.startswith("http"):
            return url_or_path
        return urljoin(self.settings.base_url, url_or_path)

    def get_headers(self) -> Dict[str, str]:
        """Get default HTTP headers."""
        return {"User-Agent": self.settings.user_agent}

    async def _get_text(self, url: str) -> str:
        async with self.session.get(
            url,
            headers=self.get_headers(),
            timeout=self.timeout
        ) as resp:
            if resp.status != 200:
                raise BadStatusError(resp.status, url)
            return await resp.text()

    async def fetch(self, url_or_path: str) -> str:
        """
        Fetch a page with exponential backoff retry.

        Args:
            url_or_path: Absolute URL or a path on the site

        Returns:
            Response text

        Raises:
            FetchError: When every attempt failed
        """
        url = self.resolve_url(url_or_path)
        attempts = 0

        async def attempt() -> str:
            nonlocal attempts
            attempts += 1
            return await self._get_text(url)

        try:
            return await retry_async(
                attempt,
                max_retries=self.settings.max_retries,
                initial_delay=self.settings.retry_initial_delay,
                max_delay=self.settings.retry_max_delay,
                jitter=self.settings.retry_jitter,
                sleep=self._sleep,
            )
        except TRANSIENT_ERRORS as e:
            raise FetchError(url, attempts, e) from e

    @staticmethod
    def create_connector(limit: int = 20) -> aiohttp.TCPConnector:
        """Create a TCP connector with appropriate limits."""
        return aiohttp.TCPConnector(limit=limit)
