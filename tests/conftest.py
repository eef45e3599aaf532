"""
Root pytest configuration for crawler tests.

Provides:
- HTML fixtures from tests/fixtures
- In-memory aiohttp session doubles (no network)
"""

import sys
from pathlib import Path

# Add project root to Python path so `import mailbox_crawler` works
# without an installed package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


class FakeResponse:
    """Minimal stand-in for an aiohttp response context manager."""

    def __init__(self, status=200, text="", payload=None, text_error=None):
        self.status = status
        self._text = text
        self._payload = payload
        self._text_error = text_error

    async def text(self):
        if self._text_error is not None:
            raise self._text_error
        return self._text

    async def json(self):
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """
    Records GET calls and serves canned responses.

    ``routes`` maps a URL to a response, an exception, or a list of those
    consumed one per call.
    """

    def __init__(self, routes=None, default=None):
        self.routes = dict(routes or {})
        self.default = default
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        entry = self.routes.get(url, self.default)
        if isinstance(entry, list):
            entry = entry.pop(0)
        if entry is None:
            return FakeResponse(status=404)
        if isinstance(entry, BaseException):
            raise entry
        return entry


class SleepRecorder:
    """Awaitable replacement for asyncio.sleep that records delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def country_html():
    return load_fixture("country_usa.html")


@pytest.fixture
def state_html():
    return load_fixture("state_alabama.html")


@pytest.fixture
def empty_state_html():
    return load_fixture("state_empty.html")


@pytest.fixture
def detail_html():
    return load_fixture("detail_suite.html")


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()
