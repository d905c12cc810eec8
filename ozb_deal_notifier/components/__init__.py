"""
Core components for the OzBargain Deal Notifier.

This module contains the components that fetch deal pages, extract deals,
format embeds and deliver them to Discord.
"""

from .deal_extractor import DealExtractor, build_deal_url, parse_votes
from .embed_formatter import (
    build_detail_embeds,
    build_payload,
    build_table_embed,
    vote_tier,
)
from .page_fetcher import PageFetcher
from .webhook_notifier import DiscordWebhookNotifier

__all__ = [
    "DealExtractor",
    "build_deal_url",
    "parse_votes",
    "build_detail_embeds",
    "build_payload",
    "build_table_embed",
    "vote_tier",
    "PageFetcher",
    "DiscordWebhookNotifier",
]
