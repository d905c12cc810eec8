"""
Unit tests for the embed formatting functions.
"""

import pytest

from conftest import make_deal
from ozb_deal_notifier.components.embed_formatter import (
    TABLE_COLOR,
    TIER_COLORS,
    build_detail_embed,
    build_detail_embeds,
    build_payload,
    build_table_embed,
    vote_tier,
)
from ozb_deal_notifier.models.embed import NotificationMode, VoteTier


class TestVoteTier:
    """Test cases for vote tier boundaries."""

    @pytest.mark.parametrize(
        "votes, tier",
        [
            (0, VoteTier.LOW),
            (99, VoteTier.LOW),
            (100, VoteTier.MEDIUM),
            (199, VoteTier.MEDIUM),
            (200, VoteTier.HIGH),
            (1500, VoteTier.HIGH),
        ],
    )
    def test_boundaries(self, votes, tier):
        assert vote_tier(votes) == tier

    def test_tier_colors(self):
        assert TIER_COLORS[VoteTier.HIGH] == 0x00FF00
        assert TIER_COLORS[VoteTier.MEDIUM] == 0xFFA500
        assert TIER_COLORS[VoteTier.LOW] == 0xFF0000


class TestTableEmbed:
    """Test cases for the single summary embed."""

    def test_three_deals(self, sample_deals):
        embed = build_table_embed(sample_deals)

        assert embed.title == "🔥 Computing Top Deals Deals (3 found)"
        assert embed.color == TABLE_COLOR
        assert embed.fields == []
        assert embed.footer.text == "OzBargain Deal Alert"
        assert embed.description == (
            "\n**🔗 Links:**\n"
            "1. [First deal](https://www.ozbargain.com.au/node/1) *(341 votes)*\n"
            "2. [Second deal](https://www.ozbargain.com.au/node/2) *(150 votes)*\n"
            "3. [Third deal](https://www.ozbargain.com.au/node/3) *(0 votes)*\n"
        )

    def test_uses_first_deal_category(self):
        deals = [
            make_deal(category="Computing New Deals"),
            make_deal(category="Electronics New Deals"),
        ]

        embed = build_table_embed(deals)

        assert embed.title == "🔥 Computing New Deals Deals (2 found)"

    def test_requires_deals(self):
        with pytest.raises(ValueError):
            build_table_embed([])


class TestDetailEmbeds:
    """Test cases for per-deal embeds."""

    def test_one_embed_per_deal(self, sample_deals):
        embeds = build_detail_embeds(sample_deals)

        assert [e.title for e in embeds] == ["First deal", "Second deal", "Third deal"]
        assert [e.url for e in embeds] == [d.url for d in sample_deals]

    def test_embed_shape(self):
        deal = make_deal(
            title="Cheap SSD", votes=200, timestamp="17/10/2026 - 10:15"
        )

        embed = build_detail_embed(deal)

        assert embed.color == 0x00FF00
        assert embed.description is None
        assert [(f.name, f.value, f.inline) for f in embed.fields] == [
            ("👍 Votes", "200", True),
            ("🕒 Posted", "17/10/2026 - 10:15", True),
        ]
        assert embed.footer.text == "OzBargain Deal Alert - Computing Top Deals"

    def test_missing_timestamp_shows_placeholder(self):
        deal = make_deal(timestamp="")

        posted = build_detail_embed(deal).fields[1]

        assert posted.value == "Unknown"
        assert deal.timestamp == ""

    @pytest.mark.parametrize(
        "votes, color",
        [(99, 0xFF0000), (100, 0xFFA500), (199, 0xFFA500), (200, 0x00FF00)],
    )
    def test_color_by_votes(self, votes, color):
        assert build_detail_embed(make_deal(votes=votes)).color == color


class TestBuildPayload:
    """Test cases for the webhook envelope."""

    def test_table_mode(self, sample_deals):
        payload = build_payload(sample_deals, NotificationMode.TABLE)

        data = payload.to_dict()

        assert "content" not in data
        assert len(data["embeds"]) == 1
        embed = data["embeds"][0]
        assert "url" not in embed
        assert embed["fields"] == []
        assert embed["footer"] == {"text": "OzBargain Deal Alert"}

    def test_detail_mode(self, sample_deals):
        payload = build_payload(sample_deals, NotificationMode.DETAIL)

        data = payload.to_dict()

        assert len(data["embeds"]) == 3
        first = data["embeds"][0]
        assert first == {
            "title": "First deal",
            "url": "https://www.ozbargain.com.au/node/1",
            "color": 0x00FF00,
            "fields": [
                {"name": "👍 Votes", "value": "341", "inline": True},
                {"name": "🕒 Posted", "value": "17/10/2026 - 10:15", "inline": True},
            ],
            "footer": {"text": "OzBargain Deal Alert - Computing Top Deals"},
        }
