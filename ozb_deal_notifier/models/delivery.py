"""
Message delivery result models.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class DeliveryResult:
    """Result of a webhook delivery attempt."""

    success: bool
    delivery_time: datetime
    error_message: Optional[str]
    status_code: Optional[int] = None
    embed_count: int = 0

    def validate(self) -> bool:
        """Validate delivery result data."""
        if not isinstance(self.success, bool):
            raise ValueError("success must be a boolean")

        if not isinstance(self.delivery_time, datetime):
            raise ValueError("delivery_time must be a datetime object")

        if self.error_message is not None:
            if not isinstance(self.error_message, str):
                raise ValueError("error_message must be a string or None")

            if len(self.error_message) > 500:
                raise ValueError("error_message too long (max 500 characters)")

        # Logical validation: if success is False, error_message should be provided
        if not self.success and not self.error_message:
            raise ValueError("error_message should be provided when success is False")

        if self.embed_count < 0:
            raise ValueError("embed_count cannot be negative")

        return True


@dataclass
class FeedResult:
    """Outcome of one fetch -> extract -> notify pass over a feed."""

    category: str
    url: str
    deals_found: int = 0
    delivery: Optional[DeliveryResult] = None
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        if self.error_message is not None:
            return False
        return self.delivery is None or self.delivery.success
