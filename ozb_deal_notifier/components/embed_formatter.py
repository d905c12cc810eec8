"""
Embed formatting component for the OzBargain Deal Notifier.

Builds Discord embeds from deals. The builders are pure functions so the
exact message shape can be checked without a webhook.
"""

from typing import List, Sequence

from ..models.deal import Deal
from ..models.embed import (
    Embed,
    EmbedField,
    EmbedFooter,
    NotificationMode,
    VoteTier,
    WebhookPayload,
)

FOOTER_TEXT = "OzBargain Deal Alert"
TABLE_COLOR = 0x00A86B  # OzBargain green

HIGH_VOTES_THRESHOLD = 200
MEDIUM_VOTES_THRESHOLD = 100

# Discord rejects embed fields with an empty value.
UNKNOWN_TIMESTAMP = "Unknown"

TIER_COLORS = {
    VoteTier.HIGH: 0x00FF00,  # Green
    VoteTier.MEDIUM: 0xFFA500,  # Orange
    VoteTier.LOW: 0xFF0000,  # Red
}


def vote_tier(votes: int) -> VoteTier:
    """Band a vote count into a colour tier."""
    if votes >= HIGH_VOTES_THRESHOLD:
        return VoteTier.HIGH
    elif votes >= MEDIUM_VOTES_THRESHOLD:
        return VoteTier.MEDIUM
    return VoteTier.LOW


def build_table_embed(deals: Sequence[Deal]) -> Embed:
    """
    Summarise a batch of deals as a single embed with a numbered link list.

    The title uses the category of the first deal; callers only pass
    deals from one feed.

    Args:
        deals: Non-empty sequence of deals

    Returns:
        Embed: One embed covering the whole batch
    """
    if not deals:
        raise ValueError("Cannot build a table embed without deals")

    lines = ["\n**🔗 Links:**\n"]
    for index, deal in enumerate(deals, start=1):
        lines.append(
            f"{index}. [{deal.title}]({deal.url}) *({deal.votes} votes)*\n"
        )

    return Embed(
        title=f"🔥 {deals[0].category} Deals ({len(deals)} found)",
        description="".join(lines),
        color=TABLE_COLOR,
        footer=EmbedFooter(text=FOOTER_TEXT),
    )


def build_detail_embed(deal: Deal) -> Embed:
    """Build the embed for a single deal."""
    return Embed(
        title=deal.title,
        url=deal.url,
        color=TIER_COLORS[vote_tier(deal.votes)],
        fields=[
            EmbedField(name="👍 Votes", value=str(deal.votes), inline=True),
            EmbedField(
                name="🕒 Posted",
                value=deal.timestamp or UNKNOWN_TIMESTAMP,
                inline=True,
            ),
        ],
        footer=EmbedFooter(text=f"{FOOTER_TEXT} - {deal.category}"),
    )


def build_detail_embeds(deals: Sequence[Deal]) -> List[Embed]:
    """Build one embed per deal, in input order."""
    return [build_detail_embed(deal) for deal in deals]


def build_payload(deals: Sequence[Deal], mode: NotificationMode) -> WebhookPayload:
    """
    Build the webhook envelope for a batch of deals.

    Args:
        deals: Deals to present
        mode: Table (one summary embed) or detail (one embed per deal)

    Returns:
        WebhookPayload ready for serialisation
    """
    if mode == NotificationMode.TABLE:
        embeds = [build_table_embed(deals)]
    else:
        embeds = build_detail_embeds(deals)

    return WebhookPayload(embeds=embeds)
