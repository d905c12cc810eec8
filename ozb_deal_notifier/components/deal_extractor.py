"""
Deal extraction component for the OzBargain Deal Notifier.

This module turns the HTML of an OzBargain deals block (``ul.ozblist``)
into Deal objects. Extraction is a single pass over the list items;
missing or malformed fields degrade to defaults instead of failing.
"""

import logging
import re
from typing import List, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from ..models.deal import Deal
from ..utils.error_handling import ParseError


logger = logging.getLogger(__name__)

SITE_ORIGIN = "https://www.ozbargain.com.au"

ITEM_SELECTOR = "ul.ozblist li"
TITLE_SELECTOR = "div.title a"
TIMESTAMP_SELECTOR = "ul.meta li.timestamp"
VOTES_SELECTOR = "ul.meta li.votes"

# Optional sign then ASCII digits; "1_000" and "+ 5" do not count.
VOTES_PATTERN = re.compile(r"^[+-]?[0-9]+\Z")


def parse_votes(text: str) -> int:
    """
    Parse a vote badge such as ``+341`` into an integer.

    Args:
        text: Raw vote text from the page

    Returns:
        Vote count, or 0 if the text is empty or not a number
    """
    votes_text = (text or "").strip()
    if votes_text.startswith("+"):
        votes_text = votes_text[1:]

    if not VOTES_PATTERN.match(votes_text):
        return 0

    return max(int(votes_text), 0)


def build_deal_url(href: str, origin: str = SITE_ORIGIN) -> str:
    """
    Resolve a relative deal link against the site origin.

    Args:
        href: Relative path from the anchor, e.g. ``/node/123``
        origin: Site origin without trailing slash

    Returns:
        Absolute URL, or an empty string when there is no href
    """
    href = (href or "").strip()
    if not href:
        return ""
    return origin + href


class DealExtractor:
    """Extracts deals from OzBargain deals-block HTML."""

    def __init__(self, site_origin: str = SITE_ORIGIN):
        """
        Initialize deal extractor.

        Args:
            site_origin: Origin prefixed to relative deal links
        """
        self.site_origin = site_origin.rstrip("/")

    def extract(self, html: Union[bytes, str], category: str) -> List[Deal]:
        """
        Extract deals from a deals-block document.

        Args:
            html: Raw page body
            category: Label attached to every deal from this page

        Returns:
            Deals in page order

        Raises:
            ParseError: If the body cannot be parsed as HTML at all
        """
        try:
            soup = BeautifulSoup(html, "html.parser")
        except Exception as e:
            raise ParseError(f"Failed to parse deals page for {category}: {e}") from e

        deals = []
        for item in soup.select(ITEM_SELECTOR):
            deal = self._extract_item(item, category)
            if deal is not None:
                deals.append(deal)

        logger.debug(f"Extracted {len(deals)} deals for {category}")
        return deals

    def _extract_item(self, item: Tag, category: str):
        """Build a Deal from one list item, or None if it has no title or link."""
        anchor = item.select_one(TITLE_SELECTOR)
        title = anchor.get_text().strip() if anchor else ""
        href = anchor.get("href", "") if anchor else ""
        url = build_deal_url(href, self.site_origin)

        if not title or not url:
            logger.debug("Skipping list item without title or link")
            return None

        timestamp_node = item.select_one(TIMESTAMP_SELECTOR)
        votes_node = item.select_one(VOTES_SELECTOR)

        return Deal(
            title=title,
            url=url,
            timestamp=timestamp_node.get_text().strip() if timestamp_node else "",
            votes=parse_votes(votes_node.get_text()) if votes_node else 0,
            category=category,
        )
