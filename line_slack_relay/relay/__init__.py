"""LINE to Slack inquiry relay.

A customer's LINE message is enriched with their profile and order history,
posted to Slack with an AI-drafted reply, and acknowledged on LINE. A staff
member answers from a Slack dialog and the answer is relayed back to LINE.
"""

from line_slack_relay.relay.builder import RelayServices, build_relay_services
from line_slack_relay.relay.exceptions import (
    DialogFailure,
    LookupFailure,
    NotificationFailure,
    RelayError,
    RelayFailure,
    SuggestionFailure,
)
from line_slack_relay.relay.models import (
    CorrelationToken,
    CustomerProfile,
    InquiryContext,
    OrderRecord,
)
from line_slack_relay.relay.service import InquiryOrchestrator, InquiryState

__all__ = [
    "CorrelationToken",
    "CustomerProfile",
    "DialogFailure",
    "InquiryContext",
    "InquiryOrchestrator",
    "InquiryState",
    "LookupFailure",
    "NotificationFailure",
    "OrderRecord",
    "RelayError",
    "RelayFailure",
    "RelayServices",
    "SuggestionFailure",
    "build_relay_services",
]
