"""
Protocol interfaces for the OzBargain Deal Notifier.

This module defines the protocol interfaces that establish system
boundaries and enable dependency injection throughout the application.
"""

from datetime import datetime
from typing import List, Optional, Protocol, Sequence, Union

from .models.deal import Deal
from .models.delivery import DeliveryResult
from .models.embed import NotificationMode


class IPageFetcher(Protocol):
    """Protocol for retrieving deals pages."""

    def fetch(self, url: str) -> bytes:
        """Return the raw body of the page at url."""
        ...


class IDealExtractor(Protocol):
    """Protocol for extracting deals from page HTML."""

    def extract(self, html: Union[bytes, str], category: str) -> List[Deal]:
        """Extract deals from a deals page, tagging each with category."""
        ...


class INotifier(Protocol):
    """Protocol for delivering deals to a messaging platform."""

    def notify(
        self, deals: Sequence[Deal], mode: NotificationMode
    ) -> DeliveryResult:
        """Deliver a batch of deals."""
        ...


class IClock(Protocol):
    """Protocol for the scheduler's time source."""

    def now(self) -> datetime:
        """Current time as a timezone-aware datetime."""
        ...

    async def sleep(self, seconds: float) -> None:
        """Suspend the calling task."""
        ...


class ITrigger(Protocol):
    """Protocol for job triggers."""

    def get_next_fire_time(
        self, previous_fire_time: Optional[datetime], now: datetime
    ) -> Optional[datetime]:
        """First fire time at or after now, or None when it never fires again."""
        ...
