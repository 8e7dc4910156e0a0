"""Unit tests for InquiryOrchestrator."""

from unittest.mock import AsyncMock, Mock

import pytest

from line_slack_relay.relay.exceptions import LookupFailure, NotificationFailure, RelayFailure
from line_slack_relay.relay.models import CustomerRecord, InquiryContext
from line_slack_relay.relay.service import (
    ACKNOWLEDGMENT_TEXT,
    ERROR_TEXT,
    InquiryOrchestrator,
    InquiryState,
)

INQUIRY = InquiryContext(sender_id="U1", text="注文はいつ届きますか？", reply_token="T1")


@pytest.fixture
def stub_directory(profile, orders) -> Mock:
    directory = Mock()
    directory.fetch_profile_and_orders = AsyncMock(return_value=CustomerRecord(profile=profile, orders=orders))
    return directory


@pytest.fixture
def stub_notifier() -> Mock:
    notifier = Mock()
    notifier.notify = AsyncMock()
    return notifier


@pytest.fixture
def stub_relay() -> Mock:
    relay = Mock()
    relay.relay = AsyncMock()
    return relay


@pytest.fixture
def orchestrator(stub_directory, stub_notifier, stub_relay) -> InquiryOrchestrator:
    return InquiryOrchestrator(stub_directory, stub_notifier, stub_relay)


class TestHandleInquiry:
    """Tests for the inbound inquiry pipeline."""

    async def test_success_notifies_then_acknowledges(
        self, orchestrator, stub_directory, stub_notifier, stub_relay, profile, orders
    ):
        state = await orchestrator.handle_inquiry(INQUIRY)

        assert state is InquiryState.ACKNOWLEDGED
        stub_directory.fetch_profile_and_orders.assert_awaited_once_with("U1")
        stub_notifier.notify.assert_awaited_once_with("U1", INQUIRY.text, profile, orders, "T1")
        stub_relay.relay.assert_awaited_once_with("T1", ACKNOWLEDGMENT_TEXT)

    async def test_acknowledges_after_notification(self, orchestrator, stub_notifier, stub_relay):
        calls = []
        stub_notifier.notify.side_effect = lambda *args: calls.append("notify")
        stub_relay.relay.side_effect = lambda *args: calls.append("relay")

        await orchestrator.handle_inquiry(INQUIRY)

        assert calls == ["notify", "relay"]

    async def test_lookup_failure_sends_error_text_only(
        self, orchestrator, stub_directory, stub_notifier, stub_relay
    ):
        stub_directory.fetch_profile_and_orders.side_effect = LookupFailure("timeout", sender_id="U1")

        state = await orchestrator.handle_inquiry(INQUIRY)

        assert state is InquiryState.ERROR_ACKNOWLEDGED
        stub_notifier.notify.assert_not_awaited()
        stub_relay.relay.assert_awaited_once_with("T1", ERROR_TEXT)

    async def test_notification_failure_sends_error_text_only(self, orchestrator, stub_notifier, stub_relay):
        stub_notifier.notify.side_effect = NotificationFailure("invalid_payload", status_code=400)

        state = await orchestrator.handle_inquiry(INQUIRY)

        assert state is InquiryState.ERROR_ACKNOWLEDGED
        stub_relay.relay.assert_awaited_once_with("T1", ERROR_TEXT)

    async def test_unexpected_failure_sends_error_text(self, orchestrator, stub_directory, stub_relay):
        stub_directory.fetch_profile_and_orders.side_effect = RuntimeError("bug")

        state = await orchestrator.handle_inquiry(INQUIRY)

        assert state is InquiryState.ERROR_ACKNOWLEDGED
        stub_relay.relay.assert_awaited_once_with("T1", ERROR_TEXT)

    async def test_failed_acknowledgment_is_not_raised(self, orchestrator, stub_relay):
        stub_relay.relay.side_effect = RelayFailure("Invalid reply token", status_code=400)

        state = await orchestrator.handle_inquiry(INQUIRY)

        assert state is InquiryState.ACKNOWLEDGED
        stub_relay.relay.assert_awaited_once()

    async def test_failed_error_acknowledgment_is_not_raised(self, orchestrator, stub_directory, stub_relay):
        stub_directory.fetch_profile_and_orders.side_effect = LookupFailure("timeout")
        stub_relay.relay.side_effect = RelayFailure("expired")

        state = await orchestrator.handle_inquiry(INQUIRY)

        assert state is InquiryState.ERROR_ACKNOWLEDGED


class TestHandleStaffResponse:
    """Tests for relaying staff replies."""

    async def test_relays_text_with_token(self, orchestrator, stub_relay):
        await orchestrator.handle_staff_response("T1", "Thanks, shipping tomorrow.")

        stub_relay.relay.assert_awaited_once_with("T1", "Thanks, shipping tomorrow.")

    async def test_relay_failure_propagates(self, orchestrator, stub_relay):
        stub_relay.relay.side_effect = RelayFailure("Invalid reply token", status_code=400)

        with pytest.raises(RelayFailure):
            await orchestrator.handle_staff_response("T1", "hello")

        stub_relay.relay.assert_awaited_once()
