"""Slack interaction dispatch.

Handles the two interactions of the reply flow: the notification button
(``block_actions``) opens the reply dialog, and the dialog submission
(``view_submission``) relays the typed reply to LINE.
"""

from typing import Any

from line_slack_relay.platform.observability.logging import get_logger
from line_slack_relay.relay.blocks import (
    HANDLE_CUSTOMER_ACTION_ID,
    REPLY_ACTION_ID,
    REPLY_BLOCK_ID,
)
from line_slack_relay.relay.dialogs import SlackReplyDialog
from line_slack_relay.relay.models import CorrelationToken
from line_slack_relay.relay.service import InquiryOrchestrator

logger = get_logger(__name__)

CLEAR_RESPONSE = {"response_action": "clear"}


class SlackInteractionHandler:
    def __init__(self, orchestrator: InquiryOrchestrator, dialog: SlackReplyDialog):
        self._orchestrator = orchestrator
        self._dialog = dialog

    async def handle(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        """Dispatch one interaction payload.

        Returns:
            The JSON body to answer Slack with, or None for an empty 200

        Raises:
            KeyError, ValueError: If the payload or correlation token is malformed
            DialogFailure, RelayFailure: If the platform call fails
        """
        interaction_type = payload["type"]

        if interaction_type == "block_actions":
            await self._handle_block_actions(payload)
            return None

        if interaction_type == "view_submission":
            await self._handle_view_submission(payload)
            return CLEAR_RESPONSE

        logger.debug("interaction_ignored", type=interaction_type)
        return None

    async def _handle_block_actions(self, payload: dict[str, Any]) -> None:
        for action in payload.get("actions", []):
            if action.get("action_id") != HANDLE_CUSTOMER_ACTION_ID:
                continue
            token = CorrelationToken.parse(action.get("value"))
            await self._dialog.open(payload["trigger_id"], token)

    async def _handle_view_submission(self, payload: dict[str, Any]) -> None:
        view = payload["view"]
        token = CorrelationToken.parse(view.get("private_metadata"))
        reply_text = view["state"]["values"][REPLY_BLOCK_ID][REPLY_ACTION_ID]["value"]
        if not reply_text:
            raise ValueError("reply text is empty")

        logger.info("staff_reply_submitted", user_id=token.user_id)
        await self._orchestrator.handle_staff_response(token.reply_token, reply_text)
