"""
Deal data models for the OzBargain Deal Notifier.
"""

from dataclasses import dataclass
from urllib.parse import urlparse


@dataclass
class Deal:
    """A single listing extracted from an OzBargain deals block."""

    title: str
    url: str
    timestamp: str
    votes: int
    category: str

    def validate(self) -> bool:
        """Validate the deal data."""
        if not self.title or not self.title.strip():
            raise ValueError("Deal title cannot be empty")

        if not self.url or not self.url.strip():
            raise ValueError("Deal URL cannot be empty")

        # Validate URL format
        parsed_url = urlparse(self.url)
        if not parsed_url.scheme or not parsed_url.netloc:
            raise ValueError(f"Invalid URL format: {self.url}")

        if not isinstance(self.votes, int) or self.votes < 0:
            raise ValueError("Vote count must be a non-negative integer")

        if not isinstance(self.timestamp, str):
            raise ValueError("timestamp must be a string")

        return True
