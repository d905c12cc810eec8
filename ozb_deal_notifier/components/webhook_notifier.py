"""
Discord webhook notifier for the OzBargain Deal Notifier.

Posts a batch of deals to a Discord webhook in a single request. Delivery
is best-effort: failures are logged and recorded, never retried and never
raised to the caller.
"""

import logging
from datetime import datetime
from typing import Optional, Sequence

import requests

from ..models.deal import Deal
from ..models.delivery import DeliveryResult
from ..models.embed import NotificationMode
from ..utils.error_handling import (
    DeliveryError,
    ErrorCategory,
    ErrorSeverity,
    get_error_tracker,
)
from .embed_formatter import build_payload


logger = logging.getLogger(__name__)

# Discord answers a webhook post without ?wait=true with 204 No Content.
ACCEPTED_STATUS = 204
MAX_ERROR_MESSAGE_LENGTH = 500


class DiscordWebhookNotifier:
    """Formats deals as embeds and posts them to a Discord webhook."""

    def __init__(
        self,
        webhook_url: Optional[str],
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the notifier.

        Args:
            webhook_url: Discord webhook URL
            session: HTTP session to post with; a new one is created if omitted
            timeout: Request timeout in seconds, None for no timeout
        """
        self.webhook_url = webhook_url
        self.session = session or requests.Session()
        self.timeout = timeout

    def notify(
        self, deals: Sequence[Deal], mode: NotificationMode = NotificationMode.DETAIL
    ) -> DeliveryResult:
        """
        Post deals to the webhook.

        Args:
            deals: Deals to post, all from the same feed
            mode: Presentation mode

        Returns:
            DeliveryResult: Outcome of the delivery; never raises
        """
        if not deals:
            logger.info("No deals to post")
            return DeliveryResult(
                success=True, delivery_time=datetime.now(), error_message=None
            )

        if not self.webhook_url:
            return self._failure(
                DeliveryError("Discord webhook URL is not configured"), len(deals)
            )

        payload = build_payload(deals, mode)
        embed_count = len(payload.embeds)

        try:
            response = self.session.post(
                self.webhook_url, json=payload.to_dict(), timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            return self._failure(
                DeliveryError(f"Error posting to Discord: {e}"), len(deals)
            )

        try:
            body = response.text
        except (requests.exceptions.RequestException, OSError) as e:
            return self._failure(
                DeliveryError(
                    f"Error reading response body: {e}",
                    status_code=response.status_code,
                ),
                len(deals),
            )

        if response.status_code != ACCEPTED_STATUS:
            return self._failure(
                DeliveryError(
                    f"Discord webhook returned status {response.status_code}: {body}",
                    status_code=response.status_code,
                    response_body=body,
                ),
                len(deals),
            )

        logger.info(f"Successfully posted {len(deals)} deals to Discord")
        result = DeliveryResult(
            success=True,
            delivery_time=datetime.now(),
            error_message=None,
            status_code=response.status_code,
            embed_count=embed_count,
        )
        result.validate()
        return result

    def _failure(self, error: DeliveryError, deal_count: int) -> DeliveryResult:
        """Log and record a failed delivery; the batch is dropped."""
        message = str(error)
        logger.error(message)
        get_error_tracker().record_error(
            component="webhook.notifier",
            category=ErrorCategory.MESSAGE_DELIVERY,
            severity=ErrorSeverity.MEDIUM,
            message=message,
            exception=error,
            context={"status_code": error.status_code, "deals": deal_count},
        )

        if len(message) > MAX_ERROR_MESSAGE_LENGTH:
            message = message[: MAX_ERROR_MESSAGE_LENGTH - 3] + "..."

        return DeliveryResult(
            success=False,
            delivery_time=datetime.now(),
            error_message=message,
            status_code=error.status_code,
        )

    def test_connection(self) -> bool:
        """
        Check that the webhook exists without posting a message.

        Discord returns the webhook object for a GET on its URL.
        """
        if not self.webhook_url:
            return False

        try:
            response = self.session.get(self.webhook_url, timeout=10)
            response.raise_for_status()
            logger.info("Discord webhook connection test successful")
            return True
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to connect to Discord webhook: {e}")
            return False
