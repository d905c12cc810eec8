"""
Data models for the OzBargain Deal Notifier.

This module contains all data classes and type definitions used throughout
the application for representing deals, webhook messages and configuration.
"""

from .config import Configuration, FeedConfig, JobConfig, TriggerConfig
from .deal import Deal
from .delivery import DeliveryResult, FeedResult
from .embed import (
    Embed,
    EmbedField,
    EmbedFooter,
    NotificationMode,
    VoteTier,
    WebhookPayload,
)

__all__ = [
    "Deal",
    "Embed",
    "EmbedField",
    "EmbedFooter",
    "NotificationMode",
    "VoteTier",
    "WebhookPayload",
    "DeliveryResult",
    "FeedResult",
    "Configuration",
    "FeedConfig",
    "JobConfig",
    "TriggerConfig",
]
