"""
Configuration models for the system.
"""

from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .embed import NotificationMode


@dataclass
class FeedConfig:
    """One OzBargain deals block and how its deals are presented."""

    category: str
    url: str
    mode: NotificationMode

    def validate(self) -> bool:
        """Validate feed configuration."""
        if not self.category or not self.category.strip():
            raise ValueError("Feed category cannot be empty")

        parsed_url = urlparse(self.url)
        if parsed_url.scheme not in ("http", "https") or not parsed_url.netloc:
            raise ValueError(f"Invalid feed URL: {self.url}")

        if not isinstance(self.mode, NotificationMode):
            raise ValueError("mode must be a NotificationMode enum")

        return True


@dataclass
class TriggerConfig:
    """When a job fires."""

    type: str  # "daily" or "interval"
    hour: int = 0
    minute: int = 0
    hours: int = 0

    def validate(self) -> bool:
        """Validate trigger configuration."""
        if self.type not in ["daily", "interval"]:
            raise ValueError("Trigger type must be 'daily' or 'interval'")

        if self.type == "daily":
            if not (0 <= self.hour <= 23):
                raise ValueError("Daily trigger hour must be between 0 and 23")
            if not (0 <= self.minute <= 59):
                raise ValueError("Daily trigger minute must be between 0 and 59")

        if self.type == "interval":
            if not (1 <= self.hours <= 24):
                raise ValueError("Interval trigger hours must be between 1 and 24")

        return True


@dataclass
class JobConfig:
    """A named group of feeds scraped together on one trigger."""

    name: str
    trigger: TriggerConfig
    feeds: List[FeedConfig]
    run_on_startup: bool = True

    def validate(self) -> bool:
        """Validate job configuration."""
        if not self.name or not self.name.strip():
            raise ValueError("Job name cannot be empty")

        self.trigger.validate()

        if not self.feeds:
            raise ValueError(f"Job '{self.name}' must have at least one feed")

        for feed in self.feeds:
            feed.validate()

        return True


@dataclass
class Configuration:
    """Main system configuration."""

    webhook_url: Optional[str]
    jobs: List[JobConfig]
    port: int = 8080
    host: str = "0.0.0.0"
    log_level: str = "INFO"
    log_dir: str = "logs"
    request_timeout: Optional[float] = None
    user_agent: str = "OzBargain-Deal-Notifier/1.0"
    site_origin: str = "https://www.ozbargain.com.au"
    timezone: Optional[str] = None  # IANA name; local zone when unset

    def validate(self) -> bool:
        """Validate complete configuration."""
        if self.webhook_url:
            parsed_url = urlparse(self.webhook_url)
            if parsed_url.scheme not in ("http", "https") or not parsed_url.netloc:
                raise ValueError("Webhook URL must be an http(s) URL")

        if not isinstance(self.port, int) or not (1 <= self.port <= 65535):
            raise ValueError("Port must be between 1 and 65535")

        if not isinstance(self.log_level, str) or self.log_level.upper() not in [
            "DEBUG",
            "INFO",
            "WARNING",
            "ERROR",
            "CRITICAL",
        ]:
            raise ValueError(f"Invalid log level: {self.log_level}")

        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError("Request timeout must be positive")

        if self.timezone is not None:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, TypeError, ValueError) as e:
                raise ValueError(f"Unknown timezone: {self.timezone}") from e

        if not self.jobs:
            raise ValueError("At least one job must be configured")

        names = [job.name for job in self.jobs]
        if len(names) != len(set(names)):
            raise ValueError("Job names must be unique")

        for job in self.jobs:
            job.validate()

        return True
