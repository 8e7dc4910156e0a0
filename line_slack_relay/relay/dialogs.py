"""Staff reply dialog opened from the notification button."""

import aiohttp
from slack_sdk.errors import SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from line_slack_relay.platform.observability.logging import get_logger
from line_slack_relay.relay.blocks import build_reply_modal
from line_slack_relay.relay.exceptions import DialogFailure
from line_slack_relay.relay.models import CorrelationToken

logger = get_logger(__name__)


class SlackReplyDialog:
    """Opens the reply modal with views.open.

    The modal's private metadata carries the correlation token that the
    view_submission interaction later returns.
    """

    def __init__(self, client: AsyncWebClient | None):
        self._client = client

    async def open(self, trigger_id: str, token: CorrelationToken) -> None:
        """Open the reply dialog for the staff member who clicked the button.

        Raises:
            DialogFailure: If no bot token is configured or Slack rejects the call
        """
        if self._client is None:
            raise DialogFailure("Slack bot token is not configured")
        try:
            await self._client.views_open(trigger_id=trigger_id, view=build_reply_modal(token))
        except (SlackClientError, aiohttp.ClientError, TimeoutError) as e:
            raise DialogFailure(str(e)) from e

        logger.info("reply_dialog_opened", user_id=token.user_id)
