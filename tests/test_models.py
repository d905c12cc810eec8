"""
Unit tests for data models.
"""

from datetime import datetime

import pytest

from conftest import make_deal
from ozb_deal_notifier.models.config import (
    Configuration,
    FeedConfig,
    JobConfig,
    TriggerConfig,
)
from ozb_deal_notifier.models.delivery import DeliveryResult, FeedResult
from ozb_deal_notifier.models.embed import (
    Embed,
    EmbedField,
    EmbedFooter,
    NotificationMode,
    WebhookPayload,
)


class TestDeal:
    """Test cases for Deal model."""

    def test_valid_deal(self, sample_deal):
        assert sample_deal.validate() is True

    def test_zero_votes_and_empty_timestamp_are_valid(self):
        assert make_deal(votes=0, timestamp="").validate() is True

    def test_empty_title(self):
        with pytest.raises(ValueError, match="title cannot be empty"):
            make_deal(title="   ").validate()

    def test_relative_url(self, sample_deal):
        sample_deal.url = "/node/123"

        with pytest.raises(ValueError, match="Invalid URL format"):
            sample_deal.validate()

    def test_negative_votes(self):
        with pytest.raises(ValueError, match="non-negative"):
            make_deal(votes=-1).validate()


class TestEmbed:
    """Test cases for Embed models."""

    def test_minimal_to_dict_omits_unset_keys(self):
        embed = Embed(title="Deal", color=0x00FF00)

        assert embed.to_dict() == {"title": "Deal", "color": 0x00FF00, "fields": []}

    def test_full_to_dict(self):
        embed = Embed(
            title="Deal",
            color=0xFFA500,
            url="https://www.ozbargain.com.au/node/1",
            description="Links",
            fields=[EmbedField(name="👍 Votes", value="150", inline=True)],
            footer=EmbedFooter(text="OzBargain Deal Alert"),
        )

        assert embed.to_dict() == {
            "title": "Deal",
            "url": "https://www.ozbargain.com.au/node/1",
            "description": "Links",
            "color": 0xFFA500,
            "fields": [{"name": "👍 Votes", "value": "150", "inline": True}],
            "footer": {"text": "OzBargain Deal Alert"},
        }

    def test_validate_limits(self):
        assert Embed(title="Deal", color=0).validate() is True

        with pytest.raises(ValueError, match="title too long"):
            Embed(title="x" * 257, color=0).validate()

        with pytest.raises(ValueError, match="color"):
            Embed(title="Deal", color=0x1000000).validate()

        with pytest.raises(ValueError, match="too many fields"):
            Embed(
                title="Deal",
                color=0,
                fields=[EmbedField(name=str(i), value="v") for i in range(26)],
            ).validate()

    def test_payload(self):
        payload = WebhookPayload(embeds=[Embed(title="Deal", color=0)])

        assert payload.to_dict() == {
            "embeds": [{"title": "Deal", "color": 0, "fields": []}]
        }
        assert "content" not in payload.to_dict()


class TestDeliveryResult:
    """Test cases for DeliveryResult and FeedResult."""

    def test_valid_success(self):
        result = DeliveryResult(
            success=True, delivery_time=datetime.now(), error_message=None
        )

        assert result.validate() is True

    def test_failure_requires_message(self):
        result = DeliveryResult(
            success=False, delivery_time=datetime.now(), error_message=None
        )

        with pytest.raises(ValueError, match="error_message should be provided"):
            result.validate()

    def test_error_message_too_long(self):
        result = DeliveryResult(
            success=False, delivery_time=datetime.now(), error_message="x" * 501
        )

        with pytest.raises(ValueError, match="too long"):
            result.validate()

    def test_feed_result_success(self):
        ok = DeliveryResult(success=True, delivery_time=datetime.now(), error_message=None)
        failed = DeliveryResult(
            success=False, delivery_time=datetime.now(), error_message="status 500"
        )

        assert FeedResult(category="c", url="u").success is True
        assert FeedResult(category="c", url="u", delivery=ok).success is True
        assert FeedResult(category="c", url="u", delivery=failed).success is False
        assert FeedResult(category="c", url="u", error_message="timeout").success is False


class TestConfigModels:
    """Test cases for configuration models."""

    def test_feed_config(self, sample_feed):
        assert sample_feed.validate() is True

        with pytest.raises(ValueError, match="Invalid feed URL"):
            FeedConfig(category="c", url="ozbargain", mode=NotificationMode.TABLE).validate()

        with pytest.raises(ValueError, match="NotificationMode"):
            FeedConfig(
                category="c", url="https://www.ozbargain.com.au/x", mode="table"
            ).validate()

    @pytest.mark.parametrize(
        "trigger",
        [
            TriggerConfig(type="cron"),
            TriggerConfig(type="daily", hour=24),
            TriggerConfig(type="daily", minute=60),
            TriggerConfig(type="interval", hours=0),
            TriggerConfig(type="interval", hours=25),
        ],
    )
    def test_invalid_triggers(self, trigger):
        with pytest.raises(ValueError):
            trigger.validate()

    def test_job_requires_feeds(self):
        job = JobConfig(
            name="top_deals", trigger=TriggerConfig(type="daily", hour=9), feeds=[]
        )

        with pytest.raises(ValueError, match="at least one feed"):
            job.validate()

    def test_configuration(self, sample_configuration):
        sample_configuration.port = 8080
        assert sample_configuration.validate() is True

    def test_configuration_without_webhook(self, sample_configuration):
        sample_configuration.port = 8080
        sample_configuration.webhook_url = None

        assert sample_configuration.validate() is True

    def test_configuration_rejects_duplicate_jobs(self, sample_configuration):
        sample_configuration.port = 8080
        sample_configuration.jobs.append(sample_configuration.jobs[0])

        with pytest.raises(ValueError, match="unique"):
            sample_configuration.validate()

    def test_configuration_rejects_bad_values(self, sample_configuration):
        sample_configuration.port = 70000
        with pytest.raises(ValueError, match="Port"):
            sample_configuration.validate()

        sample_configuration.port = 8080
        sample_configuration.log_level = "VERBOSE"
        with pytest.raises(ValueError, match="log level"):
            sample_configuration.validate()

        sample_configuration.log_level = "INFO"
        sample_configuration.request_timeout = 0
        with pytest.raises(ValueError, match="timeout"):
            sample_configuration.validate()

    def test_configuration_requires_jobs(self):
        config = Configuration(webhook_url=None, jobs=[])

        with pytest.raises(ValueError, match="At least one job"):
            config.validate()
