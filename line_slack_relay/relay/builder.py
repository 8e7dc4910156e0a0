"""Construction of the relay services from settings.

Every platform client is created here once per application and injected into
the services that use it; nothing in the relay reaches for a global client.
"""

from dataclasses import dataclass

import httpx
from linebot.v3 import WebhookParser
from linebot.v3.messaging import AsyncApiClient, AsyncMessagingApi, Configuration
from slack_sdk.signature import SignatureVerifier
from slack_sdk.web.async_client import AsyncWebClient

from line_slack_relay.platform.clients.llm import LlmClient
from line_slack_relay.platform.observability.logging import get_logger
from line_slack_relay.platform.settings import Settings
from line_slack_relay.relay.dialogs import SlackReplyDialog
from line_slack_relay.relay.directory import (
    CustomerDirectory,
    HttpCustomerDirectory,
    MockCustomerDirectory,
)
from line_slack_relay.relay.interactions import SlackInteractionHandler
from line_slack_relay.relay.notifier import (
    NotificationDelivery,
    SlackChatDelivery,
    SlackWebhookDelivery,
    StaffNotifier,
)
from line_slack_relay.relay.replies import LineReplyRelay
from line_slack_relay.relay.service import InquiryOrchestrator
from line_slack_relay.relay.suggestion import SuggestionGenerator

logger = get_logger(__name__)


@dataclass
class RelayServices:
    """Services and platform clients shared by the relay routes."""

    orchestrator: InquiryOrchestrator
    interactions: SlackInteractionHandler
    line_parser: WebhookParser
    slack_verifier: SignatureVerifier | None
    line_api_client: AsyncApiClient

    async def aclose(self) -> None:
        await self.line_api_client.close()


def build_directory(settings: Settings, http_client: httpx.AsyncClient) -> CustomerDirectory:
    if settings.directory.base_url:
        return HttpCustomerDirectory(
            http_client, settings.directory.base_url, timeout=settings.directory.timeout
        )
    logger.info("customer_directory_mock_enabled")
    return MockCustomerDirectory()


def build_delivery(settings: Settings, slack_client: AsyncWebClient | None) -> NotificationDelivery:
    if settings.slack.use_chat_api and slack_client is not None:
        return SlackChatDelivery(slack_client, settings.slack.channel_id)
    return SlackWebhookDelivery(settings.slack.webhook_url)


def build_relay_services(settings: Settings, http_client: httpx.AsyncClient) -> RelayServices:
    """Wire the relay from settings.

    Args:
        settings: Application settings
        http_client: Shared HTTP client for the customer directory

    Returns:
        The constructed services; call ``aclose`` on shutdown
    """
    llm = LlmClient(
        model_name=settings.llm.model,
        api_key=settings.llm.api_key,
        api_base=settings.llm.api_base,
        temperature=settings.llm.temperature,
        max_tokens=settings.llm.max_tokens,
    )
    slack_client = AsyncWebClient(token=settings.slack.bot_token) if settings.slack.bot_token else None

    line_api_client = AsyncApiClient(
        Configuration(access_token=settings.line.channel_access_token)
    )

    notifier = StaffNotifier(SuggestionGenerator(llm), build_delivery(settings, slack_client))
    orchestrator = InquiryOrchestrator(
        directory=build_directory(settings, http_client),
        notifier=notifier,
        relay=LineReplyRelay(AsyncMessagingApi(line_api_client)),
    )

    verifier = None
    if settings.slack.signing_secret:
        verifier = SignatureVerifier(settings.slack.signing_secret)

    return RelayServices(
        orchestrator=orchestrator,
        interactions=SlackInteractionHandler(orchestrator, SlackReplyDialog(slack_client)),
        line_parser=WebhookParser(settings.line.channel_secret),
        slack_verifier=verifier,
        line_api_client=line_api_client,
    )
