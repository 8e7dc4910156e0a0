"""Staff notification to Slack.

The notifier asks for an AI suggestion, renders the notification blocks and
delivers them once. A failed suggestion is replaced by a placeholder so staff
are always notified.
"""

from typing import Protocol

import aiohttp
from slack_sdk.errors import SlackClientError
from slack_sdk.web.async_client import AsyncWebClient
from slack_sdk.webhook.async_client import AsyncWebhookClient

from line_slack_relay.platform.observability.logging import get_logger
from line_slack_relay.relay.blocks import build_fallback_text, build_notification_blocks
from line_slack_relay.relay.exceptions import NotificationFailure
from line_slack_relay.relay.models import CorrelationToken, CustomerProfile, OrderRecord
from line_slack_relay.relay.suggestion import SuggestionGenerator

logger = get_logger(__name__)

SUGGESTION_FAILED = "※ AI提案の生成に失敗しました"


class NotificationDelivery(Protocol):
    """Transport that posts a composed notification to the staff channel."""

    async def deliver(self, text: str, blocks: list[dict]) -> None:
        """Post the notification.

        Raises:
            NotificationFailure: If Slack rejects the message or is unreachable
        """
        ...


class SlackWebhookDelivery:
    """Delivers through a Slack incoming webhook."""

    def __init__(self, webhook_url: str, client: AsyncWebhookClient | None = None):
        self._webhook_url = webhook_url
        self._client = client or AsyncWebhookClient(webhook_url)

    async def deliver(self, text: str, blocks: list[dict]) -> None:
        if not self._webhook_url:
            raise NotificationFailure("Slack webhook URL is not configured")
        try:
            response = await self._client.send(text=text, blocks=blocks)
        except (SlackClientError, aiohttp.ClientError, TimeoutError) as e:
            raise NotificationFailure(str(e)) from e
        if response.status_code != 200:
            raise NotificationFailure(response.body, status_code=response.status_code)


class SlackChatDelivery:
    """Delivers with chat.postMessage to a fixed channel using the bot token."""

    def __init__(self, client: AsyncWebClient, channel_id: str):
        self._client = client
        self._channel_id = channel_id

    async def deliver(self, text: str, blocks: list[dict]) -> None:
        try:
            await self._client.chat_postMessage(
                channel=self._channel_id, text=text, blocks=blocks
            )
        except (SlackClientError, aiohttp.ClientError, TimeoutError) as e:
            raise NotificationFailure(str(e)) from e


class StaffNotifier:
    def __init__(self, suggestions: SuggestionGenerator, delivery: NotificationDelivery):
        self._suggestions = suggestions
        self._delivery = delivery

    async def _suggest(
        self, profile: CustomerProfile, orders: list[OrderRecord], message: str
    ) -> str:
        try:
            return await self._suggestions.generate_suggestion(profile, orders, message)
        except Exception:
            logger.exception("suggestion_failed", customer_id=profile.id)
            return SUGGESTION_FAILED

    async def notify(
        self,
        sender_id: str,
        message: str,
        profile: CustomerProfile,
        orders: list[OrderRecord],
        reply_token: str,
    ) -> None:
        """Compose and deliver exactly one staff notification.

        Raises:
            NotificationFailure: If delivery fails; suggestion failures never raise
        """
        suggestion = await self._suggest(profile, orders, message)
        token = CorrelationToken(reply_token=reply_token, user_id=sender_id)
        blocks = build_notification_blocks(profile, orders, message, suggestion, token)

        await self._delivery.deliver(build_fallback_text(profile, message), blocks)
        logger.info("slack_notification_sent", sender_id=sender_id, customer_id=profile.id)
