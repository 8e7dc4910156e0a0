"""Relay HTTP endpoints.

- ``POST /webhook/line``: LINE webhook receiving customer messages
- ``POST /webhook/slack/interactions``: Slack button and dialog interactions
- ``/mock-mcp/*``: demo customer directory serving generated data
"""

import asyncio
import json
from enum import Enum

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse
from linebot.v3 import WebhookParser
from linebot.v3.exceptions import InvalidSignatureError
from linebot.v3.webhooks import MessageEvent, TextMessageContent
from slack_sdk.signature import SignatureVerifier

from line_slack_relay.platform.observability.logging import get_logger
from line_slack_relay.relay.dependencies import (
    get_interaction_handler,
    get_line_parser,
    get_orchestrator,
    get_slack_verifier,
)
from line_slack_relay.relay.interactions import SlackInteractionHandler
from line_slack_relay.relay.mock_data import generate_customer, generate_orders
from line_slack_relay.relay.models import InquiryContext
from line_slack_relay.relay.service import InquiryOrchestrator

logger = get_logger(__name__)

webhook_tags: list[Enum | str] = ["webhooks"]

line_router = APIRouter(tags=webhook_tags)
slack_router = APIRouter(tags=webhook_tags)
mock_router = APIRouter(prefix="/mock-mcp", tags=["mock"])


def extract_inquiries(events: list) -> list[InquiryContext]:
    """Select the text messages sent by identifiable users.

    Non-message events and non-text messages are ignored. Text messages
    without a user ID cannot be looked up and are logged and skipped.
    """
    inquiries = []
    for event in events:
        if not isinstance(event, MessageEvent) or not isinstance(event.message, TextMessageContent):
            continue
        user_id = getattr(event.source, "user_id", None)
        if not user_id:
            logger.warning("line_event_skipped", reason="no user id", source=type(event.source).__name__)
            continue
        inquiries.append(
            InquiryContext(sender_id=user_id, text=event.message.text, reply_token=event.reply_token)
        )
    return inquiries


@line_router.post("/webhook/line")
async def line_webhook(
    request: Request,
    x_line_signature: str = Header(""),
    parser: WebhookParser = Depends(get_line_parser),
    orchestrator: InquiryOrchestrator = Depends(get_orchestrator),
) -> Response:
    """Receive a batch of LINE events.

    Every inquiry in the batch is processed concurrently and the response is
    sent once all of them have settled.

    Returns:
        200 when every inquiry completed, 400 on a bad signature, 500 if any
        inquiry raised (the rest are not cancelled)
    """
    body = await request.body()
    try:
        events = parser.parse(body.decode("utf-8"), x_line_signature)
    except InvalidSignatureError:
        logger.warning("line_signature_invalid")
        return Response(status_code=400)
    except (UnicodeDecodeError, ValueError):
        logger.warning("line_payload_invalid")
        return Response(status_code=400)

    inquiries = extract_inquiries(events)
    results = await asyncio.gather(
        *(orchestrator.handle_inquiry(inquiry) for inquiry in inquiries),
        return_exceptions=True,
    )

    failed = False
    for inquiry, result in zip(inquiries, results, strict=True):
        if isinstance(result, BaseException):
            failed = True
            logger.error("inquiry_failed", sender_id=inquiry.sender_id, error=repr(result))

    logger.info("line_webhook_processed", event_count=len(events), inquiry_count=len(inquiries))
    return Response(status_code=500 if failed else 200)


@slack_router.post("/webhook/slack/interactions")
async def slack_interactions(
    request: Request,
    verifier: SignatureVerifier | None = Depends(get_slack_verifier),
    handler: SlackInteractionHandler = Depends(get_interaction_handler),
) -> Response:
    """Receive a Slack interaction (form body with a ``payload`` JSON field).

    Returns:
        200 (with ``{"response_action": "clear"}`` after a dialog submission),
        401 on a bad signature, 500 on a malformed payload or any failure
    """
    body = await request.body()
    if verifier is not None and not verifier.is_valid_request(body, dict(request.headers)):
        logger.warning("slack_signature_invalid")
        return Response(status_code=401)

    try:
        form = await request.form()
        payload = json.loads(form["payload"])
        result = await handler.handle(payload)
    except Exception:
        logger.exception("slack_interaction_failed")
        return Response(status_code=500)

    if result is None:
        return Response(status_code=200)
    return JSONResponse(result)


@mock_router.get("/customer/{user_id}")
async def mock_customer(user_id: str):
    return generate_customer(user_id).model_dump(mode="json", by_alias=True)


@mock_router.get("/orders/{user_id}")
async def mock_orders(user_id: str):
    return [order.model_dump(mode="json", by_alias=True) for order in generate_orders(user_id)]


@mock_router.get("/health")
async def mock_health():
    return {"status": "ok"}
