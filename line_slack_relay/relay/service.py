"""Inquiry orchestration.

Sequences one LINE inquiry through lookup, staff notification and
acknowledgment, and relays staff replies back to the customer.

Per inquiry::

    received -> looked_up -> notified -> acknowledged
    received -> failed -> error_acknowledged

The customer sees exactly one outcome: the acknowledgment or the error text.
"""

from enum import StrEnum
from typing import Protocol

import structlog

from line_slack_relay.platform.observability.logging import get_logger
from line_slack_relay.platform.observability.metrics import record_inquiry_outcome
from line_slack_relay.relay.directory import CustomerDirectory
from line_slack_relay.relay.exceptions import RelayFailure
from line_slack_relay.relay.models import InquiryContext
from line_slack_relay.relay.notifier import StaffNotifier

logger = get_logger(__name__)

ACKNOWLEDGMENT_TEXT = "ありがとうございます。担当者に通知しました。"
ERROR_TEXT = "メッセージの処理中にエラーが発生しました。しばらくしてからもう一度お試しください。"


class InquiryState(StrEnum):
    RECEIVED = "received"
    LOOKED_UP = "looked_up"
    NOTIFIED = "notified"
    ACKNOWLEDGED = "acknowledged"
    FAILED = "failed"
    ERROR_ACKNOWLEDGED = "error_acknowledged"


class ReplyRelay(Protocol):
    async def relay(self, reply_token: str, text: str) -> None:
        """Deliver ``text`` with a one-time reply token.

        Raises:
            RelayFailure: If the reply cannot be delivered
        """
        ...


class InquiryOrchestrator:
    """Customer inquiry pipeline.

    Collaborators are injected so each request works on explicitly constructed
    clients; the orchestrator holds no per-inquiry state.
    """

    def __init__(
        self,
        directory: CustomerDirectory,
        notifier: StaffNotifier,
        relay: ReplyRelay,
    ):
        self._directory = directory
        self._notifier = notifier
        self._relay = relay

    async def handle_inquiry(self, inquiry: InquiryContext) -> InquiryState:
        """Process one inbound text message to a terminal state.

        Lookup and notification failures are logged and answered with the
        error text. A failed acknowledgment is logged only.

        Returns:
            ``InquiryState.ACKNOWLEDGED`` or ``InquiryState.ERROR_ACKNOWLEDGED``
        """
        log = logger.bind(sender_id=inquiry.sender_id)
        log.info("inquiry_transition", state=InquiryState.RECEIVED)

        try:
            record = await self._directory.fetch_profile_and_orders(inquiry.sender_id)
            log.info("inquiry_transition", state=InquiryState.LOOKED_UP)

            await self._notifier.notify(
                inquiry.sender_id,
                inquiry.text,
                record.profile,
                record.orders,
                inquiry.reply_token,
            )
            log.info("inquiry_transition", state=InquiryState.NOTIFIED)
        except Exception:
            log.exception("inquiry_transition", state=InquiryState.FAILED)
            await self._acknowledge(inquiry.reply_token, ERROR_TEXT, log)
            state = InquiryState.ERROR_ACKNOWLEDGED
        else:
            await self._acknowledge(inquiry.reply_token, ACKNOWLEDGMENT_TEXT, log)
            state = InquiryState.ACKNOWLEDGED

        log.info("inquiry_transition", state=state)
        record_inquiry_outcome(state)
        return state

    async def _acknowledge(
        self, reply_token: str, text: str, log: structlog.stdlib.BoundLogger
    ) -> None:
        try:
            await self._relay.relay(reply_token, text)
        except RelayFailure as e:
            log.error("acknowledgment_failed", error=str(e))

    async def handle_staff_response(self, reply_token: str, text: str) -> None:
        """Relay a staff reply to the customer.

        Raises:
            RelayFailure: If LINE rejects the reply; there is no fallback
        """
        try:
            await self._relay.relay(reply_token, text)
        except RelayFailure as e:
            logger.error("staff_response_failed", error=str(e))
            raise
        logger.info("staff_response_sent")
