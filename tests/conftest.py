"""
Pytest configuration and shared fixtures.

This module provides common fixtures and helpers for all tests in the
OzBargain Deal Notifier test suite.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from unittest.mock import Mock

import pytest
import requests

from ozb_deal_notifier.models.config import (
    Configuration,
    FeedConfig,
    JobConfig,
    TriggerConfig,
)
from ozb_deal_notifier.models.deal import Deal
from ozb_deal_notifier.models.embed import NotificationMode
from ozb_deal_notifier.utils import error_handling


def make_deal(
    title: str = "Samsung 990 Pro 2TB SSD $199 Delivered @ Amazon AU",
    node: int = 123456,
    timestamp: str = "17/10/2026 - 10:15",
    votes: int = 25,
    category: str = "Computing Top Deals",
) -> Deal:
    """Create a Deal with sensible defaults."""
    return Deal(
        title=title,
        url=f"https://www.ozbargain.com.au/node/{node}",
        timestamp=timestamp,
        votes=votes,
        category=category,
    )


def deal_item_html(
    title: Optional[str] = "Deal",
    href: Optional[str] = "/node/1",
    timestamp: Optional[str] = "17/10/2026 - 10:15",
    votes: Optional[str] = "+10",
) -> str:
    """Render one ``li`` of an OzBargain deals block; None omits a part."""
    anchor = ""
    if title is not None:
        href_attr = f' href="{href}"' if href is not None else ""
        anchor = f'<div class="title"><a{href_attr}>{title}</a></div>'

    meta = ""
    if timestamp is not None:
        meta += f'<li class="timestamp">{timestamp}</li>'
    if votes is not None:
        meta += f'<li class="votes">{votes}</li>'

    return f'<li>{anchor}<ul class="meta">{meta}</ul></li>'


def deals_block_html(items: List[str]) -> bytes:
    """Wrap rendered items in the deals-block container."""
    body = "".join(items)
    return f'<div class="block"><ul class="ozblist">{body}</ul></div>'.encode()


class FakeClock:
    """
    Clock whose time only moves when a test advances it.

    Time is kept in UTC so advancing is real elapsed time; ``now`` reports it
    in the zone of the start time.
    """

    def __init__(self, start: datetime):
        self.timezone = start.tzinfo
        self.current = start.astimezone(timezone.utc)
        self._sleepers = []

    def now(self) -> datetime:
        return self.current.astimezone(self.timezone)

    async def sleep(self, seconds: float) -> None:
        future = asyncio.get_running_loop().create_future()
        self._sleepers.append((self.current + timedelta(seconds=seconds), future))
        await future

    @property
    def sleeper_count(self) -> int:
        return len([f for _, f in self._sleepers if not f.done()])

    async def advance(self, delta: timedelta) -> None:
        """Move time forward and wake every sleeper whose deadline passed."""
        self.current += delta
        for entry in list(self._sleepers):
            deadline, future = entry
            if deadline <= self.current:
                self._sleepers.remove(entry)
                if not future.done():
                    future.set_result(None)
        for _ in range(5):
            await asyncio.sleep(0)


@pytest.fixture(autouse=True)
def reset_error_tracker():
    """Give every test a fresh global error tracker."""
    error_handling._error_tracker = None
    yield
    error_handling._error_tracker = None


@pytest.fixture
def sample_deal():
    """Create a sample Deal for testing."""
    return make_deal()


@pytest.fixture
def sample_deals():
    """Three deals from the same feed, in page order."""
    return [
        make_deal(title="First deal", node=1, votes=341),
        make_deal(title="Second deal", node=2, votes=150),
        make_deal(title="Third deal", node=3, votes=0),
    ]


@pytest.fixture
def mock_response():
    """Factory for requests.Response stand-ins."""

    def _make(status_code: int = 204, text: str = "", content: bytes = b""):
        response = Mock(spec=requests.Response)
        response.status_code = status_code
        response.text = text
        response.content = content
        return response

    return _make


@pytest.fixture
def mock_session():
    """A requests.Session stand-in that records calls."""
    session = Mock(spec=requests.Session)
    session.headers = {}
    return session


@pytest.fixture
def sample_feed():
    return FeedConfig(
        category="Computing New Deals",
        url="https://www.ozbargain.com.au/ozbapi/block/ozbdeal_new?tid=12&f=1",
        mode=NotificationMode.TABLE,
    )


@pytest.fixture
def sample_configuration(sample_feed):
    """Create a sample Configuration for testing."""
    return Configuration(
        webhook_url="https://discord.com/api/webhooks/123/abc",
        jobs=[
            JobConfig(
                name="top_deals",
                trigger=TriggerConfig(type="daily", hour=9),
                feeds=[
                    FeedConfig(
                        category="Computing Top Deals",
                        url="https://www.ozbargain.com.au/ozbapi/block/ozbdeal_top?dur=30&tid=12",
                        mode=NotificationMode.DETAIL,
                    )
                ],
            ),
            JobConfig(
                name="new_deals",
                trigger=TriggerConfig(type="interval", hours=6),
                feeds=[sample_feed],
            ),
        ],
        port=0,
        host="127.0.0.1",
    )
