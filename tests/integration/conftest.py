"""Integration test fixtures.

This module provides shared fixtures for integration tests:
- Route/handler tests with stubbed relay services (shallow app setup)
- Signed LINE webhook and Slack interaction request builders
"""

import base64
import hashlib
import hmac
import json
import time
from collections.abc import Callable, Generator
from unittest.mock import AsyncMock, Mock
from urllib.parse import urlencode

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from linebot.v3 import WebhookParser

from line_slack_relay.platform.server.health import HealthCheck
from line_slack_relay.platform.server.routes import root as root_router
from line_slack_relay.relay.builder import RelayServices
from line_slack_relay.relay.interactions import SlackInteractionHandler
from line_slack_relay.relay.routes import line_router, mock_router, slack_router
from line_slack_relay.relay.service import InquiryState

LINE_CHANNEL_SECRET = "test-channel-secret"
SLACK_SIGNING_SECRET = "test-signing-secret"

# =============================================================================
# Request Builders
# =============================================================================


def text_message_event(user_id: str | None = "U1", text: str = "hello", reply_token: str = "T1") -> dict:
    """A LINE text message event as delivered by the webhook."""
    source = {"type": "user", "userId": user_id} if user_id else {"type": "group", "groupId": "G1"}
    return {
        "type": "message",
        "mode": "active",
        "timestamp": 1700000000000,
        "webhookEventId": f"01HEVENT{reply_token}",
        "deliveryContext": {"isRedelivery": False},
        "source": source,
        "replyToken": reply_token,
        "message": {"type": "text", "id": "468789577898262530", "quoteToken": "q-token", "text": text},
    }


def follow_event(user_id: str = "U9") -> dict:
    return {
        "type": "follow",
        "mode": "active",
        "timestamp": 1700000000000,
        "webhookEventId": "01HFOLLOW",
        "deliveryContext": {"isRedelivery": False},
        "source": {"type": "user", "userId": user_id},
        "replyToken": "T-follow",
        "follow": {"isUnblocked": False},
    }


def line_signature(body: str, secret: str = LINE_CHANNEL_SECRET) -> str:
    digest = hmac.new(secret.encode("utf-8"), body.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def slack_form_body(payload: dict) -> str:
    return urlencode({"payload": json.dumps(payload)})


def slack_headers(body: str, secret: str = SLACK_SIGNING_SECRET, timestamp: int | None = None) -> dict:
    timestamp = timestamp or int(time.time())
    basestring = f"v0:{timestamp}:{body}".encode()
    signature = "v0=" + hmac.new(secret.encode("utf-8"), basestring, hashlib.sha256).hexdigest()
    return {
        "Content-Type": "application/x-www-form-urlencoded",
        "X-Slack-Request-Timestamp": str(timestamp),
        "X-Slack-Signature": signature,
    }


@pytest.fixture
def make_text_event() -> Callable[..., dict]:
    return text_message_event


@pytest.fixture
def make_follow_event() -> Callable[..., dict]:
    return follow_event


@pytest.fixture
def post_line_events(client: TestClient) -> Callable:
    """Post a correctly signed LINE webhook delivery."""

    def post(*events: dict):
        body = json.dumps({"destination": "Ubot", "events": list(events)})
        return client.post(
            "/webhook/line",
            content=body,
            headers={"X-Line-Signature": line_signature(body), "Content-Type": "application/json"},
        )

    return post


@pytest.fixture
def post_slack_payload(client: TestClient) -> Callable:
    """Post a Slack interaction, signed with the test signing secret."""

    def post(payload: dict, secret: str = SLACK_SIGNING_SECRET, timestamp: int | None = None):
        body = slack_form_body(payload)
        return client.post(
            "/webhook/slack/interactions",
            content=body,
            headers=slack_headers(body, secret=secret, timestamp=timestamp),
        )

    return post


# =============================================================================
# Relay Service Stubs
# =============================================================================


@pytest.fixture
def stub_orchestrator() -> Mock:
    """Orchestrator stub; every inquiry is acknowledged."""
    orchestrator = Mock()
    orchestrator.handle_inquiry = AsyncMock(return_value=InquiryState.ACKNOWLEDGED)
    orchestrator.handle_staff_response = AsyncMock()
    return orchestrator


@pytest.fixture
def stub_dialog() -> Mock:
    dialog = Mock()
    dialog.open = AsyncMock()
    return dialog


@pytest.fixture
def slack_verifier():
    """No signing secret configured; override to enable verification."""
    return None


@pytest.fixture
def relay_services(stub_orchestrator: Mock, stub_dialog: Mock, slack_verifier) -> RelayServices:
    return RelayServices(
        orchestrator=stub_orchestrator,
        interactions=SlackInteractionHandler(stub_orchestrator, stub_dialog),
        line_parser=WebhookParser(LINE_CHANNEL_SECRET),
        slack_verifier=slack_verifier,
        line_api_client=Mock(),
    )


# =============================================================================
# Test App Fixtures
# =============================================================================


@pytest.fixture
def test_app(relay_services: RelayServices) -> FastAPI:
    """Create a minimal test FastAPI app for integration tests.

    This is intentionally SHALLOW - no middleware, no full lifespan.
    Tests route handlers and their interaction with dependencies.
    """
    app = FastAPI()

    # Register stub services directly in app.state
    app.state.relay = relay_services

    app.include_router(root_router)
    app.include_router(line_router)
    app.include_router(slack_router)
    app.include_router(mock_router)

    return app


@pytest.fixture
def client(test_app: FastAPI) -> TestClient:
    """Create a test client for the test app.

    No context manager needed since we're not using lifespan.
    """
    return TestClient(test_app)


@pytest.fixture
def client_with_health_enabled(test_app: FastAPI) -> Generator[TestClient]:
    """Create a test client with health checks enabled."""
    HealthCheck.enable()
    yield TestClient(test_app)
    HealthCheck.disable()


@pytest.fixture
def client_with_health_disabled(test_app: FastAPI) -> Generator[TestClient]:
    """Create a test client with health checks disabled."""
    HealthCheck.disable()
    yield TestClient(test_app)
