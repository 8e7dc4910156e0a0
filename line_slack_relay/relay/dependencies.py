"""Relay service dependencies for FastAPI routes.

Services are built once in the application lifespan and stored on
``app.state.relay``.
"""

from fastapi import Request
from linebot.v3 import WebhookParser
from slack_sdk.signature import SignatureVerifier

from line_slack_relay.relay.builder import RelayServices
from line_slack_relay.relay.interactions import SlackInteractionHandler
from line_slack_relay.relay.service import InquiryOrchestrator


def get_relay_services(request: Request) -> RelayServices:
    return request.app.state.relay


def get_orchestrator(request: Request) -> InquiryOrchestrator:
    return get_relay_services(request).orchestrator


def get_interaction_handler(request: Request) -> SlackInteractionHandler:
    return get_relay_services(request).interactions


def get_line_parser(request: Request) -> WebhookParser:
    return get_relay_services(request).line_parser


def get_slack_verifier(request: Request) -> SignatureVerifier | None:
    """Return the Slack signature verifier, or None when no signing secret is set."""
    return get_relay_services(request).slack_verifier
