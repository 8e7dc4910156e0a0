"""Reply delivery to LINE with one-time reply tokens."""

import aiohttp
from linebot.v3.messaging import (
    ApiException,
    AsyncMessagingApi,
    ReplyMessageRequest,
    TextMessage,
)

from line_slack_relay.platform.observability.logging import get_logger
from line_slack_relay.relay.exceptions import RelayFailure

logger = get_logger(__name__)


class LineReplyRelay:
    """Sends a single text reply through the LINE Messaging API.

    A reply token is valid once; a rejected token is not retried.
    """

    def __init__(self, messaging_api: AsyncMessagingApi):
        self._api = messaging_api

    async def relay(self, reply_token: str, text: str) -> None:
        """Reply to the event identified by ``reply_token``.

        Raises:
            RelayFailure: If LINE rejects the token (used, expired, malformed)
                or the call fails
        """
        request = ReplyMessageRequest(
            reply_token=reply_token,
            messages=[TextMessage(text=text)],
        )
        try:
            await self._api.reply_message(request)
        except ApiException as e:
            raise RelayFailure(e.reason or str(e), status_code=e.status) from e
        except (aiohttp.ClientError, TimeoutError) as e:
            raise RelayFailure(str(e)) from e

        logger.info("line_reply_sent", text_length=len(text))
